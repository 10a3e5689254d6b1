"""
Repository Interfaces
=====================
Contracts the job-history service depends on. Implemented by the GitHub
REST repositories and by the fixture (debug) repositories.
"""
from typing import List, Optional, Protocol

from runner_log.models.job import Job
from runner_log.models.runner import Runner


class RunnerRepository(Protocol):
    async def fetch_runner_by_name(self, name: str) -> Runner:
        """Case-insensitive exact match; raises RunnerNotFoundError."""
        ...


class JobRepository(Protocol):
    async def fetch_job_history(self, runner_id: Optional[int], limit: int) -> List[Job]:
        """
        Jobs in the resolved scope, filtered to `runner_id` when given.
        At least `limit` matching jobs are returned when that many exist;
        ordering is left to the caller.
        """
        ...
