"""
Runner History Service
======================
Assembles the job history of one runner:

    1. resolve the runner name to its numeric ID
    2. ask the job repository for jobs assigned to that ID
    3. sort newest start first (jobs that never started go last)
    4. truncate to the requested limit

A limit of zero or less returns an empty history without touching the
job repository.
"""
import logging
from datetime import timezone
from typing import Iterable, List

from runner_log.core.errors import RunnerLogError
from runner_log.models.job import Job
from runner_log.models.runner_job_history import RunnerJobHistory
from runner_log.services.repositories import JobRepository, RunnerRepository

logger = logging.getLogger(__name__)


def _start_key(job: Job) -> float:
    started = job.started_at
    if started.tzinfo is None:
        started = started.replace(tzinfo=timezone.utc)
    return started.timestamp()


def sort_jobs_by_start(jobs: Iterable[Job]) -> List[Job]:
    """
    Newest started_at first. Jobs without a start time keep their input
    order and follow every job that has one.
    """
    jobs = list(jobs)
    started = [j for j in jobs if j.started_at is not None]
    not_started = [j for j in jobs if j.started_at is None]
    # sorted() is stable, so equal start times keep input order too
    started = sorted(started, key=_start_key, reverse=True)
    return started + not_started


class RunnerHistoryService:
    def __init__(self, job_repo: JobRepository, runner_repo: RunnerRepository) -> None:
        self.job_repo = job_repo
        self.runner_repo = runner_repo

    async def fetch_runner_job_history(self, runner_name: str, limit: int) -> RunnerJobHistory:
        """
        Fetch up to `limit` jobs executed by `runner_name`.

        Raises
        ------
        RunnerNotFoundError
            No runner with that name exists in the scope.
        UpstreamError, PartialUpstreamError
            The job history could not be retrieved.
        """
        try:
            runner = await self.runner_repo.fetch_runner_by_name(runner_name)
        except RunnerLogError:
            logger.error("Runner lookup failed for '%s'", runner_name)
            raise

        if limit <= 0:
            return RunnerJobHistory(runner=runner, jobs=[])

        jobs = await self.job_repo.fetch_job_history(runner.id, limit)
        matching = [j for j in jobs if j.is_assigned_to_runner(runner.id)]
        if len(matching) != len(jobs):
            logger.debug("Dropped %d jobs not assigned to runner %d", len(jobs) - len(matching), runner.id)

        ordered = sort_jobs_by_start(matching)[:limit]
        logger.info("Runner %s (ID %d): %d jobs", runner.name, runner.id, len(ordered))
        return RunnerJobHistory(runner=runner, jobs=ordered)
