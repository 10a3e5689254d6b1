"""
Fixture Repositories
====================
Offline stand-ins for the GitHub repositories, fed from a JSON file
(the --debug flag):

    {
      "runners": [{"id", "name", "os", "status", "labels": [str]}],
      "jobs":    [{"id", "run_id", "name", "status", "conclusion",
                   "runner_id", "runner_name", "started_at",
                   "completed_at", "workflow_name", "repository",
                   "html_url"}]
    }

The job repository applies the same scope / runner / time-window
filters the live pipeline does, client-side. Fixture jobs carry no run
creation time, so started_at stands in for it; jobs that never started
are dropped while a window is active.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ValidationError

from runner_log.core.errors import ConfigurationError, RunnerNotFoundError
from runner_log.models.job import Job
from runner_log.models.runner import Runner
from runner_log.models.scope import Scope

logger = logging.getLogger(__name__)


class FixtureDataset(BaseModel):
    runners: List[Runner] = []
    jobs: List[Job] = []


def load_dataset(path: str) -> FixtureDataset:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"failed to read debug file {path}: {e}") from e

    try:
        dataset = FixtureDataset.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as e:
        raise ConfigurationError(f"failed to parse debug file {path}: {e}") from e

    if not dataset.runners:
        raise ConfigurationError("debug file does not contain any runners")

    logger.info(
        "Loaded debug dataset %s (%d runners, %d jobs)",
        path, len(dataset.runners), len(dataset.jobs),
    )
    return dataset


class FixtureRunnerRepository:
    def __init__(self, dataset: FixtureDataset) -> None:
        self.dataset = dataset

    async def fetch_runners(self) -> List[Runner]:
        return list(self.dataset.runners)

    async def fetch_runner_by_name(self, name: str) -> Runner:
        wanted = name.casefold()
        for runner in self.dataset.runners:
            if runner.name.casefold() == wanted:
                return runner
        raise RunnerNotFoundError(name)


class FixtureJobRepository:
    def __init__(
        self,
        dataset: FixtureDataset,
        scope: Scope = Scope(),
        created_after: Optional[datetime] = None,
    ) -> None:
        self.dataset = dataset
        self.scope = scope
        if created_after is not None and created_after.tzinfo is None:
            created_after = created_after.replace(tzinfo=timezone.utc)
        self.created_after = created_after

    def _in_window(self, job: Job) -> bool:
        if self.created_after is None:
            return True
        if job.started_at is None:
            return False
        started = job.started_at
        if started.tzinfo is None:
            started = started.replace(tzinfo=timezone.utc)
        return started >= self.created_after

    async def fetch_job_history(self, runner_id: Optional[int], limit: int) -> List[Job]:
        if limit <= 0:
            return []
        return [
            job
            for job in self.dataset.jobs
            if self.scope.matches(job.repository)
            and (runner_id is None or job.is_assigned_to_runner(runner_id))
            and self._in_window(job)
        ]


def load_fixture_repositories(
    path: str,
    scope: Scope = Scope(),
    created_after: Optional[datetime] = None,
) -> Tuple[FixtureJobRepository, FixtureRunnerRepository]:
    dataset = load_dataset(path)
    return (
        FixtureJobRepository(dataset, scope, created_after),
        FixtureRunnerRepository(dataset),
    )
