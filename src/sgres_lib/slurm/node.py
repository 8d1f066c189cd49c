# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from typing import Any, Self

from .common import get_field, get_string_list


@dataclass(frozen=True)
class SlurmNode:
    """
    Snapshot of a single Slurm node as reported by `scontrol show nodes --json`.
    Memory values are in megabytes.
    """

    hostname: str
    state: list[str] = field(default_factory=list)
    partitions: list[str] = field(default_factory=list)
    cpus: int = 0
    alloc_idle_cpus: int = 0
    real_memory: int = 0
    alloc_memory: int = 0
    gres: str = ""
    gres_used: str = ""

    @classmethod
    def fromDict(cls, record: dict[str, Any]) -> Self:
        """
        Construct a new instance of SlurmNode from one element of the `nodes` array.

        Args:
            record (dict[str, Any]): Node record decoded from the scontrol JSON dump.

        Returns:
            Self: A new instance of SlurmNode.

        Raises:
            SGresCollaboratorError: If a required field is missing or malformed.
        """
        return cls(
            hostname=get_field(record, "hostname", str),
            state=get_string_list(record, "state"),
            partitions=get_string_list(record, "partitions"),
            cpus=get_field(record, "cpus", int),
            alloc_idle_cpus=get_field(record, "alloc_idle_cpus", int),
            real_memory=get_field(record, "real_memory", int),
            alloc_memory=get_field(record, "alloc_memory", int),
            gres=get_field(record, "gres", str),
            gres_used=get_field(record, "gres_used", str),
        )

    def isInPartition(self, partition: str) -> bool:
        return partition in self.partitions
