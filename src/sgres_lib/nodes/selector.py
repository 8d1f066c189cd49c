# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from sgres_lib.core.logger import get_logger
from sgres_lib.slurm.node import SlurmNode

logger = get_logger(__name__)


def select_nodes(
    nodes: list[SlurmNode], gres: str | None, partition: str | None
) -> list[SlurmNode]:
    """
    Select the nodes to display.

    Args:
        nodes (list[SlurmNode]): All nodes reported by Slurm.
        gres (str | None): Substring the node's GRES must contain.
            If None, nodes are not filtered by GRES.
        partition (str | None): Partition the node must belong to.
            If None, nodes are not filtered by partition.

    Returns:
        list[SlurmNode]: The matching nodes in their original order.
    """
    selected = [
        node
        for node in nodes
        if (gres is None or gres in node.gres)
        and (partition is None or node.isInPartition(partition))
    ]

    logger.debug(f"Selected {len(selected)} out of {len(nodes)} nodes.")
    return selected
