# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections import defaultdict
from typing import Self

from sgres_lib.core.logger import get_logger
from sgres_lib.slurm.job import SlurmJob

from .allocation import GpuAllocation, parse_gpu_allocation

logger = get_logger(__name__)


def collect_preempted_allocations(
    jobs: list[SlurmJob], partition: str
) -> list[GpuAllocation]:
    """
    Collect the GPU allocations of all jobs in the partition of preempted jobs.

    Args:
        jobs (list[SlurmJob]): All jobs known to Slurm.
        partition (str): Name of the partition holding preempted jobs.

    Returns:
        list[GpuAllocation]: Allocations in job order and, within a job,
        in the order of its GRES details.
    """
    allocations = []
    for job in jobs:
        if job.partition != partition:
            continue

        for detail in job.gres_detail:
            if allocation := parse_gpu_allocation(detail, job.nodes):
                logger.debug(f"Preempted allocation: {allocation}.")
                allocations.append(allocation)

    return allocations


class PreemptionMap:
    """
    Number of GPUs held by preempted jobs on each node.
    """

    def __init__(self, preempted: dict[str, int] | None = None):
        self._preempted = dict(preempted or {})

    @classmethod
    def fromAllocations(cls, allocations: list[GpuAllocation]) -> Self:
        """
        Build the map from a list of allocations.

        Allocations on the same node are summed, so two preempted jobs
        sharing a node are both accounted for.
        """
        preempted: defaultdict[str, int] = defaultdict(int)
        for allocation in allocations:
            if allocation.node in preempted:
                logger.debug(
                    f"Node '{allocation.node}' hosts more than one preempted allocation."
                )
            preempted[allocation.node] += allocation.gpus

        preemption_map = cls(preempted)
        logger.debug(f"Preempted GPUs per node: {preemption_map.toDict()}.")
        return preemption_map

    @classmethod
    def fromJobs(cls, jobs: list[SlurmJob], partition: str) -> Self:
        """
        Build the map from all jobs known to Slurm.

        Args:
            jobs (list[SlurmJob]): All jobs known to Slurm.
            partition (str): Name of the partition holding preempted jobs.
        """
        return cls.fromAllocations(collect_preempted_allocations(jobs, partition))

    def getPreemptedGPUs(self, hostname: str) -> int:
        return self._preempted.get(hostname, 0)

    def toDict(self) -> dict[str, int]:
        return dict(self._preempted)
