# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Implementation of the sgres command-line tool.

sgres summarizes the CPU, memory, and GRES availability of Slurm nodes. It queries
`scontrol` for nodes and jobs, attributes the GPUs of jobs in the preempted partition
to the nodes they run on, and renders a table with one row per node.
"""

from .cli import __version__, sgres

__all__ = [
    "__version__",
    "sgres",
    "core",
    "gres",
    "nodes",
    "slurm",
]
