# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Provides node presentation utilities.

`select_nodes` narrows the nodes reported by Slurm to those matching a GRES name
and partition. `TableNode` condenses a node into a display-ready row, splitting
its GRES into units used by regular jobs, units held by preempted jobs, and idle
units. `NodesPresenter` renders the rows as a table or dumps them as YAML.
"""

from .presenter import TABLE_STYLES, NodesPresenter, TableNode
from .selector import select_nodes

__all__ = ["NodesPresenter", "TABLE_STYLES", "TableNode", "select_nodes"]
