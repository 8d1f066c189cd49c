# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from typing import NoReturn

import click
from rich.console import Console

from sgres_lib.core.click_format import GNUHelpColorsCommand
from sgres_lib.core.config import CFG
from sgres_lib.core.error import SGresError
from sgres_lib.core.logger import get_logger
from sgres_lib.gres.preemption import PreemptionMap
from sgres_lib.nodes.presenter import TABLE_STYLES, NodesPresenter, TableNode
from sgres_lib.nodes.selector import select_nodes
from sgres_lib.slurm.slurm import Slurm

__version__ = "0.2.0"

logger = get_logger(__name__)

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.command(
    help="""Display the CPU, memory, and GRES availability of Slurm nodes.

If GRES is given, only nodes whose GRES descriptor contains it are shown.

The GRES status column shows one mark per unit: `u` for units used by regular jobs,
`p` for units held by jobs in the preempted partition, and `i` for idle units.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
    context_settings=_CONTEXT_SETTINGS,
)
@click.argument("gres", required=False, default=None)
@click.option(
    "-p",
    "--partition",
    type=str,
    default=None,
    help="Only show nodes belonging to this partition.",
)
@click.option(
    "-s",
    "--style",
    type=click.Choice(list(TABLE_STYLES)),
    default=CFG.nodes_presenter.default_style,
    show_default=True,
    help="Style of the table.",
)
@click.option("--yaml", is_flag=True, help="Output node information in YAML format.")
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of sgres and exit.",
)
def sgres(
    gres: str | None, partition: str | None, style: str, yaml: bool, version: bool
) -> NoReturn:
    if version:
        print(__version__)
        sys.exit(0)

    try:
        nodes = Slurm.getNodes()
        jobs = Slurm.getJobs()

        preempted = PreemptionMap.fromJobs(
            jobs, CFG.slurm_options.preempted_partition
        )
        table_nodes = [
            TableNode.fromNode(node, preempted)
            for node in select_nodes(nodes, gres, partition)
        ]

        presenter = NodesPresenter(table_nodes)
        if yaml:
            presenter.dumpYaml()
        else:
            console = Console(markup=False)
            console.print(presenter.createNodesTable(style))
        sys.exit(0)
    except SGresError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
