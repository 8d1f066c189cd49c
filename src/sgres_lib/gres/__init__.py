# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Parsing of Slurm generic resources (GRES).

Slurm reports GRES as compact descriptors such as `gpu:a100:4(IDX:0-3)`.
`GresStatus` reads the totals of a node, `parse_gpu_allocation` reads the
GPUs granted to a job on one node, and `PreemptionMap` attributes the GPUs
held by preempted jobs to the nodes they run on.
"""

from .allocation import GpuAllocation, count_indices, parse_gpu_allocation
from .preemption import PreemptionMap, collect_preempted_allocations
from .status import GresStatus

__all__ = [
    "GpuAllocation",
    "GresStatus",
    "PreemptionMap",
    "collect_preempted_allocations",
    "count_indices",
    "parse_gpu_allocation",
]
