# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from typing import Any, Self

import yaml
from rich import box
from rich.table import Table
from rich.text import Text

from sgres_lib.core.common import load_yaml_dumper
from sgres_lib.core.config import CFG
from sgres_lib.core.error import SGresArithmeticError
from sgres_lib.gres.preemption import PreemptionMap
from sgres_lib.gres.status import GresStatus
from sgres_lib.slurm.node import SlurmNode

Dumper: type[yaml.Dumper] = load_yaml_dumper()

# table styles selectable on the command line
TABLE_STYLES: dict[str, box.Box] = {
    "markdown": box.MARKDOWN,
    "ascii": box.ASCII,
    "modern": box.SQUARE,
}


@dataclass(frozen=True)
class TableNode:
    """
    A single row of the nodes table.
    """

    hostname: str
    cpus_available: str
    memory_available: str
    gres: str
    # GRES units used by regular jobs, held by preempted jobs, and idle
    n_used: int = 0
    n_preempted: int = 0
    n_idle: int = 0
    states: list[str] = field(default_factory=list)

    @classmethod
    def fromNode(cls, node: SlurmNode, preempted: PreemptionMap) -> Self:
        """
        Build the table row for a node.

        Args:
            node (SlurmNode): The node to display.
            preempted (PreemptionMap): GPUs held by preempted jobs on each node.

        Returns:
            Self: The table row.

        Raises:
            SGresParseError: If the GRES of the node cannot be parsed.
            SGresArithmeticError: If the node reports more GRES or memory
                in use than it has in total.
        """
        total = GresStatus.fromString(node.gres)
        used = GresStatus.fromString(node.gres_used)

        if used.count > total.count:
            raise SGresArithmeticError(
                f"Node '{node.hostname}' reports {used.count} GRES in use "
                f"but only {total.count} in total."
            )

        n_preempted = preempted.getPreemptedGPUs(node.hostname)

        return cls(
            hostname=node.hostname,
            cpus_available=TableNode._formatRatio(node.alloc_idle_cpus, node.cpus),
            memory_available=TableNode._formatMemory(node),
            gres=total.model,
            n_used=max(0, used.count - n_preempted),
            n_preempted=n_preempted,
            n_idle=total.count - used.count,
            states=list(node.state),
        )

    def formatGresStatus(self) -> Text:
        """
        Render the GRES units of the node as a row of marks:
        used units first, then preempted units, then idle units.
        """
        settings = CFG.nodes_presenter
        return Text.assemble(
            (settings.used_mark * self.n_used, settings.used_style),
            (settings.preempted_mark * self.n_preempted, settings.preempted_style),
            (settings.idle_mark * self.n_idle, settings.idle_style),
        )

    def formatState(self) -> Text:
        """
        Render the state tags of the node, each in its own style, separated by commas.
        """
        return Text(",").join(
            Text(state, style=CFG.nodes_presenter.state_styles.get(state, ""))
            for state in self.states
        )

    def toDict(self) -> dict[str, Any]:
        return {
            "hostname": self.hostname,
            "cpus_available": self.cpus_available,
            "memory_available": self.memory_available,
            "gres": self.gres,
            "gres_used": self.n_used,
            "gres_preempted": self.n_preempted,
            "gres_idle": self.n_idle,
            "state": list(self.states),
        }

    @staticmethod
    def _formatRatio(available: int, total: int) -> str:
        return f"{available}/{total}"

    @staticmethod
    def _formatMemory(node: SlurmNode) -> str:
        """
        Format free and total memory of the node in whole gigabytes.

        Raises:
            SGresArithmeticError: If more memory is allocated than the node has.
        """
        if node.alloc_memory > node.real_memory:
            raise SGresArithmeticError(
                f"Node '{node.hostname}' reports {node.alloc_memory} MB of memory "
                f"allocated but only {node.real_memory} MB in total."
            )

        divisor = CFG.nodes_presenter.memory_divisor
        free = (node.real_memory - node.alloc_memory) // divisor
        return TableNode._formatRatio(free, node.real_memory // divisor) + "G"


class NodesPresenter:
    """
    Presenter class for displaying the nodes table.
    """

    def __init__(self, nodes: list[TableNode]):
        """
        Initialize the presenter with the rows to display.

        Args:
            nodes (list[TableNode]): Rows of the table in display order.
        """
        self._nodes = nodes

    def createNodesTable(self, style: str | None = None) -> Table:
        """
        Create a Rich table with one row per node.

        Args:
            style (str | None): Name of the table style, one of `TABLE_STYLES`.
                If None, the configured default style is used.

        Returns:
            Table: The table of nodes.

        Raises:
            ValueError: If the style is not known.
        """
        style = style or CFG.nodes_presenter.default_style
        if style not in TABLE_STYLES:
            raise ValueError(f"Unknown table style '{style}'.")

        table = Table(
            box=TABLE_STYLES[style],
            show_header=True,
            show_lines=style == "modern",
            header_style=CFG.nodes_presenter.headers_style,
        )

        for header in (
            "Hostname",
            "CPUs",
            "Memory",
            "GRES",
            "GRES Status",
            "State",
        ):
            table.add_column(header)

        for node in self._nodes:
            table.add_row(
                node.hostname,
                node.cpus_available,
                node.memory_available,
                node.gres,
                node.formatGresStatus(),
                node.formatState(),
            )

        return table

    def dumpYaml(self) -> None:
        """
        Print the YAML representation of all nodes to stdout.
        """
        for node in self._nodes:
            print(
                yaml.dump(
                    node.toDict(),
                    default_flow_style=False,
                    sort_keys=False,
                    Dumper=Dumper,
                    explicit_start=True,
                ),
                end="",
            )
