# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
from dataclasses import dataclass
from typing import Self

from sgres_lib.core.error import SGresParseError

# `<type>:<model>:<count>`, anything following the count is ignored
_GRES_PATTERN = re.compile(r"(?P<model>\w+:\w+):(?P<count>\d+)")

# values Slurm prints for nodes without any GRES
_EMPTY_GRES = ("", "(null)")


@dataclass(frozen=True)
class GresStatus:
    """
    Model and count of a generic resource, e.g. `gpu:a100` and 4.
    """

    model: str
    count: int

    @classmethod
    def fromString(cls, string: str) -> Self:
        """
        Parse a GRES descriptor such as `gpu:a100:4` or `gpu:a100:4(IDX:0-3)`.

        Args:
            string (str): The descriptor taken from the `gres` or `gres_used`
                field of a node.

        Returns:
            Self: The parsed status. An empty descriptor or `(null)` yields
            an empty model and a count of 0.

        Raises:
            SGresParseError: If the descriptor does not match the GRES grammar.
        """
        if string in _EMPTY_GRES:
            return cls("", 0)

        if not (match := _GRES_PATTERN.search(string)):
            raise SGresParseError(f"Could not parse GRES status '{string}'.")

        return cls(match.group("model"), int(match.group("count")))
