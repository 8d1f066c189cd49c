# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
from dataclasses import dataclass

from sgres_lib.core.logger import get_logger

logger = get_logger(__name__)

_IDX_PATTERN = re.compile(r"\(IDX:([^)]*)\)")
_LEADING_DIGITS = re.compile(r"\d*", re.ASCII)
_SINGLE_INDEX = re.compile(r"\d+", re.ASCII)
_INDEX_RANGE = re.compile(r"(\d+)-(\d+)", re.ASCII)

# `gpu:<model>:<count>` is the shortest detail carrying a count
_MIN_SEGMENTS = 3


@dataclass(frozen=True)
class GpuAllocation:
    """
    Number of GPUs granted to a job on a single node.
    """

    node: str
    gpus: int


def count_indices(spec: str) -> int:
    """
    Count the device indices listed in an IDX specification.

    The specification is a comma-separated list of indices (`3`) and inclusive
    ranges (`0-7`). Descending ranges and entries that are not indices
    (such as `N/A`) count as zero.

    Args:
        spec (str): The text between `IDX:` and the closing parenthesis.

    Returns:
        int: The number of listed devices.
    """
    count = 0
    for entry in spec.split(","):
        entry = entry.strip()

        if _SINGLE_INDEX.fullmatch(entry):
            count += 1
        elif match := _INDEX_RANGE.fullmatch(entry):
            start, end = int(match.group(1)), int(match.group(2))
            if end >= start:
                count += end - start + 1
        else:
            logger.debug(f"Ignoring invalid entry '{entry}' in IDX list '{spec}'.")

    return count


def parse_gpu_allocation(detail: str, node: str) -> GpuAllocation | None:
    """
    Read the number of GPUs granted to a job from one of its GRES details.

    The device list in `(IDX:...)` is used when present; otherwise the count
    is read from the digits at the start of the third `:`-separated segment.

    Args:
        detail (str): One entry of the job's `gres_detail`,
            e.g. `gpu:a40:2(IDX:0-1)`.
        node (str): Hostname of the node the job runs on.

    Returns:
        GpuAllocation | None: The allocation, or None if the detail does not
        describe GPUs or describes zero of them.
    """
    if not detail.startswith("gpu"):
        return None

    segments = detail.split(":")
    if len(segments) < _MIN_SEGMENTS:
        return None

    if (match := _IDX_PATTERN.search(detail)) and (
        gpus := count_indices(match.group(1))
    ) > 0:
        return GpuAllocation(node, gpus)

    digits = _LEADING_DIGITS.match(segments[2]).group(0)
    if not digits or (gpus := int(digits)) == 0:
        return None

    return GpuAllocation(node, gpus)
