# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from typing import Any, Self

from .common import get_field, get_string_list


@dataclass(frozen=True)
class SlurmJob:
    """
    Snapshot of a single Slurm job as reported by `scontrol show job --json`.

    `nodes` is kept exactly as Slurm prints it; host range expressions
    such as `gpu[1-2]` are not expanded.
    """

    partition: str
    nodes: str = ""
    gres_detail: list[str] = field(default_factory=list)

    @classmethod
    def fromDict(cls, record: dict[str, Any]) -> Self:
        """
        Construct a new instance of SlurmJob from one element of the `jobs` array.

        Pending jobs are not assigned any nodes or GRES yet, so a missing `nodes`
        or `gres_detail` field is read as empty.

        Raises:
            SGresCollaboratorError: If `partition` is missing or a field is malformed.
        """
        return cls(
            partition=get_field(record, "partition", str),
            nodes=get_field(record, "nodes", str) if "nodes" in record else "",
            gres_detail=get_string_list(record, "gres_detail")
            if "gres_detail" in record
            else [],
        )
