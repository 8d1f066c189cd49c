# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Slurm support for sgres.

This module queries `scontrol` for the JSON dumps of nodes and jobs and turns
their records into `SlurmNode` and `SlurmJob` snapshots.
"""

from .job import SlurmJob
from .node import SlurmNode
from .slurm import Slurm

__all__ = ["Slurm", "SlurmJob", "SlurmNode"]
