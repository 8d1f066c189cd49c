# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import subprocess

from sgres_lib.core.config import CFG
from sgres_lib.core.error import SGresCollaboratorError
from sgres_lib.core.logger import get_logger

from .common import parse_scontrol_json
from .job import SlurmJob
from .node import SlurmNode

logger = get_logger(__name__)


class Slurm:
    """
    Queries the Slurm controller through `scontrol`.
    """

    @staticmethod
    def getNodes() -> list[SlurmNode]:
        """
        Retrieve a snapshot of all nodes known to Slurm.

        Returns:
            list[SlurmNode]: Nodes in the order reported by scontrol.

        Raises:
            SGresCollaboratorError: If scontrol fails or its output cannot be decoded.
        """
        output = Slurm._runScontrol("show nodes --json")
        return [SlurmNode.fromDict(r) for r in parse_scontrol_json(output, "nodes")]

    @staticmethod
    def getJobs() -> list[SlurmJob]:
        """
        Retrieve a snapshot of all jobs known to Slurm.

        Returns:
            list[SlurmJob]: Jobs in the order reported by scontrol.

        Raises:
            SGresCollaboratorError: If scontrol fails or its output cannot be decoded.
        """
        output = Slurm._runScontrol("show job --json")
        return [SlurmJob.fromDict(r) for r in parse_scontrol_json(output, "jobs")]

    @staticmethod
    def _runScontrol(arguments: str) -> str:
        """
        Run scontrol with the given arguments and return its standard output.

        Raises:
            SGresCollaboratorError: If scontrol exits with a non-zero code or
                its output is not valid UTF-8.
        """
        command = f"{CFG.slurm_options.scontrol} {arguments}"
        logger.debug(command)

        try:
            result = subprocess.run(
                ["bash"],
                input=command,
                text=True,
                encoding="utf-8",
                check=False,
                capture_output=True,
            )
        except UnicodeDecodeError as e:
            raise SGresCollaboratorError(
                f"Output of '{command}' is not valid UTF-8: {e}."
            )

        if result.returncode != 0:
            raise SGresCollaboratorError(f"Scontrol failed: {result.stderr}")

        return result.stdout
