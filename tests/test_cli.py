# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from sgres_lib.cli import __version__, sgres
from sgres_lib.core.config import CFG
from sgres_lib.core.error import SGresCollaboratorError
from sgres_lib.slurm.job import SlurmJob
from sgres_lib.slurm.node import SlurmNode


def _nodes() -> list[SlurmNode]:
    return [
        SlurmNode(
            "gpu-sm01-13",
            state=["MIXED"],
            partitions=["gpu"],
            cpus=64,
            alloc_idle_cpus=32,
            real_memory=128000,
            alloc_memory=32000,
            gres="gpu:a40:4(S:0-1)",
            gres_used="gpu:a40:3(IDX:0-2)",
        ),
        SlurmNode(
            "gpu-f-6",
            state=["ALLOCATED"],
            partitions=["gpu", "long"],
            cpus=96,
            alloc_idle_cpus=0,
            real_memory=512000,
            alloc_memory=512000,
            gres="gpu:h100:4(S:0-1)",
            gres_used="gpu:h100:4(IDX:0-3)",
        ),
        SlurmNode(
            "cpu-1",
            state=["IDLE"],
            partitions=["cpu"],
            cpus=128,
            alloc_idle_cpus=128,
            real_memory=256000,
            alloc_memory=0,
            gres="(null)",
            gres_used="(null)",
        ),
    ]


def _jobs() -> list[SlurmJob]:
    return [
        SlurmJob("preempted", "gpu-sm01-13", ["gpu:a40:1(IDX:0)"]),
        SlurmJob("preempted", "gpu-f-6", ["gpu:h100:4(IDX:0-3)"]),
        SlurmJob("gpu", "gpu-sm01-13", ["gpu:a40:2(IDX:1-2)"]),
    ]


def _patch_slurm(nodes=None, jobs=None):
    mock_slurm = MagicMock()
    mock_slurm.getNodes.return_value = _nodes() if nodes is None else nodes
    mock_slurm.getJobs.return_value = _jobs() if jobs is None else jobs
    return patch("sgres_lib.cli.Slurm", mock_slurm), mock_slurm


def test_sgres_prints_table_of_all_nodes():
    runner = CliRunner()
    slurm_patch, mock_slurm = _patch_slurm()

    with slurm_patch:
        result = runner.invoke(sgres, [])

    assert result.exit_code == 0
    mock_slurm.getNodes.assert_called_once()
    mock_slurm.getJobs.assert_called_once()
    assert "gpu-sm01-13" in result.output
    assert "gpu-f-6" in result.output
    assert "cpu-1" in result.output
    assert "uupi" in result.output
    assert "pppp" in result.output
    assert "96/128G" in result.output
    assert "32/64" in result.output
    # markdown is the default style
    assert "|" in result.output


def test_sgres_filters_by_gres():
    runner = CliRunner()
    slurm_patch, _ = _patch_slurm()

    with slurm_patch:
        result = runner.invoke(sgres, ["h100"])

    assert result.exit_code == 0
    assert "gpu-f-6" in result.output
    assert "gpu-sm01-13" not in result.output
    assert "cpu-1" not in result.output


def test_sgres_filters_by_partition():
    runner = CliRunner()
    slurm_patch, _ = _patch_slurm()

    with slurm_patch:
        result = runner.invoke(sgres, ["--partition", "long"])

    assert result.exit_code == 0
    assert "gpu-f-6" in result.output
    assert "gpu-sm01-13" not in result.output


def test_sgres_passes_style_to_presenter():
    runner = CliRunner()
    slurm_patch, _ = _patch_slurm()

    with (
        slurm_patch,
        patch("sgres_lib.cli.NodesPresenter") as mock_presenter_cls,
        patch("sgres_lib.cli.Console"),
    ):
        mock_presenter = MagicMock()
        mock_presenter_cls.return_value = mock_presenter

        result = runner.invoke(sgres, ["a40", "-s", "modern"])

    assert result.exit_code == 0
    table_nodes = mock_presenter_cls.call_args.args[0]
    assert [n.hostname for n in table_nodes] == ["gpu-sm01-13"]
    mock_presenter.createNodesTable.assert_called_once_with("modern")


def test_sgres_rejects_unknown_style():
    runner = CliRunner()
    slurm_patch, mock_slurm = _patch_slurm()

    with slurm_patch:
        result = runner.invoke(sgres, ["--style", "fancy"])

    assert result.exit_code != 0
    mock_slurm.getNodes.assert_not_called()


def test_sgres_outputs_yaml_when_flag_set():
    runner = CliRunner()
    slurm_patch, _ = _patch_slurm()

    with (
        slurm_patch,
        patch("sgres_lib.cli.NodesPresenter") as mock_presenter_cls,
    ):
        mock_presenter = MagicMock()
        mock_presenter_cls.return_value = mock_presenter

        result = runner.invoke(sgres, ["--yaml"])

    assert result.exit_code == 0
    mock_presenter.dumpYaml.assert_called_once()
    mock_presenter.createNodesTable.assert_not_called()


def test_sgres_prints_version():
    runner = CliRunner()
    slurm_patch, mock_slurm = _patch_slurm()

    with slurm_patch:
        result = runner.invoke(sgres, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__
    mock_slurm.getNodes.assert_not_called()


def test_sgres_handles_collaborator_error():
    runner = CliRunner()
    slurm_patch, mock_slurm = _patch_slurm()
    mock_slurm.getNodes.side_effect = SGresCollaboratorError("Scontrol failed: boom")

    with slurm_patch, patch("sgres_lib.cli.logger") as mock_logger:
        result = runner.invoke(sgres, [])

    assert result.exit_code == CFG.exit_codes.default
    mock_logger.error.assert_called_once()
    mock_slurm.getJobs.assert_not_called()


def test_sgres_parse_error_prints_no_table():
    runner = CliRunner()
    nodes = _nodes()
    nodes.append(SlurmNode("broken", gres="gpu:8", gres_used=""))
    slurm_patch, _ = _patch_slurm(nodes=nodes)

    with slurm_patch, patch("sgres_lib.cli.logger") as mock_logger:
        result = runner.invoke(sgres, [])

    assert result.exit_code == CFG.exit_codes.default
    assert "gpu-sm01-13" not in result.output
    mock_logger.error.assert_called_once()


def test_sgres_arithmetic_error_exits_with_default_code():
    runner = CliRunner()
    nodes = [SlurmNode("odd", gres="gpu:a100:2", gres_used="gpu:a100:4")]
    slurm_patch, _ = _patch_slurm(nodes=nodes, jobs=[])

    with slurm_patch, patch("sgres_lib.cli.logger") as mock_logger:
        result = runner.invoke(sgres, [])

    assert result.exit_code == CFG.exit_codes.default
    mock_logger.error.assert_called_once()


def test_sgres_handles_unexpected_exception():
    runner = CliRunner()
    slurm_patch, mock_slurm = _patch_slurm()
    mock_slurm.getJobs.side_effect = RuntimeError("fatal")

    with slurm_patch, patch("sgres_lib.cli.logger") as mock_logger:
        result = runner.invoke(sgres, [])

    assert result.exit_code == CFG.exit_codes.unexpected_error
    mock_logger.critical.assert_called_once()


def test_sgres_help():
    result = CliRunner().invoke(sgres, ["-h"])

    assert result.exit_code == 0
    assert "--partition" in result.output
    assert "--style" in result.output
