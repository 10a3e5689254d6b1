"""
GitHub Job Repository
=====================
Collects job history for a scope through the Actions REST API.

GitHub cannot list "jobs run by runner X", so the repository walks the
workflow-run listing and reads each run's jobs:

    page 1 of runs ──► jobs of every run, fetched concurrently ──► merge
    page 2 of runs ──► ...                                        ──► merge
    ...until a short/empty page, or enough matching jobs collected.

Pages are sequential; runs within a page are fanned out with
asyncio.gather and joined before the next page is requested. Each task
returns its own job list and only the page loop touches the accumulator.

Failure policy:
    - a run-listing page failure aborts with UpstreamError (page number)
    - a per-run job failure is logged and skipped; if every run failed,
      PartialUpstreamError is raised with the skip count and last error
"""
import asyncio
import logging
from contextlib import aclosing
from datetime import datetime, timezone
from typing import AsyncIterator, List, Optional, Tuple

import httpx
from pydantic import ValidationError

from runner_log.core.constants import OVERFETCH_CAP, OVERFETCH_MULTIPLIER, RUNS_PAGE_SIZE
from runner_log.core.errors import PartialUpstreamError, RunnerLogError, UpstreamError
from runner_log.models.github_payloads import JobPayload, JobsResponse, WorkflowRun, WorkflowRunsResponse
from runner_log.models.job import Job
from runner_log.models.scope import Scope, repo_actions_base_path
from runner_log.services.github_client import get_json

logger = logging.getLogger(__name__)

JOBS_PAGE_SIZE = 100


def overfetch_limit(limit: int) -> int:
    """Raw job target when results are filtered after fetching."""
    return min(limit * OVERFETCH_MULTIPLIER, OVERFETCH_CAP)


def format_created_filter(created_after: datetime) -> str:
    """GitHub `created` qualifier: >=YYYY-MM-DDTHH:MM:SSZ."""
    if created_after.tzinfo is None:
        created_after = created_after.replace(tzinfo=timezone.utc)
    return ">=" + created_after.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def to_job(payload: JobPayload, run: WorkflowRun, repository: str) -> Job:
    return Job(
        id=payload.id,
        run_id=payload.run_id,
        run_attempt=payload.run_attempt,
        name=payload.name,
        workflow_name=run.name,
        repository=repository,
        status=payload.status,
        conclusion=payload.conclusion or "",
        runner_id=payload.runner_id,
        runner_name=payload.runner_name,
        started_at=payload.started_at,
        completed_at=payload.completed_at,
        html_url=payload.html_url or "",
    )


class GitHubJobRepository:
    """
    Parameters
    ----------
    client : httpx.AsyncClient
        Pre-authenticated client with the API base URL.
    scope : Scope
        Resolved organization or repository scope.
    created_after : datetime, optional
        Passed to GitHub as the native `created` filter on runs.
    page_size : int
        Workflow runs per listing page.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        scope: Scope,
        created_after: Optional[datetime] = None,
        page_size: int = RUNS_PAGE_SIZE,
    ) -> None:
        self.client = client
        self.scope = scope
        self.created_after = created_after
        self.page_size = page_size

    # ------------------------------------------------------------------
    # Workflow-run paginator
    # ------------------------------------------------------------------
    async def fetch_workflow_runs(self, page: int) -> List[WorkflowRun]:
        params = {"per_page": self.page_size, "page": page}
        if self.created_after is not None:
            params["created"] = format_created_filter(self.created_after)

        path = f"{self.scope.actions_base_path()}/runs"
        try:
            data = await get_json(self.client, path, params)
            return WorkflowRunsResponse.model_validate(data).workflow_runs
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            raise UpstreamError(
                f"failed to fetch workflow runs (page {page}): {e}", page=page
            ) from e

    async def iter_workflow_run_pages(self) -> AsyncIterator[Tuple[int, List[WorkflowRun]]]:
        """
        Yield (page_number, runs) until an empty or short page. The caller
        stops early by leaving the loop; no further page is requested then.
        """
        page = 1
        while True:
            logger.debug("Fetching workflow runs page %d for %s", page, self.scope)
            runs = await self.fetch_workflow_runs(page)
            if not runs:
                return
            yield page, runs
            if len(runs) < self.page_size:
                return
            page += 1

    # ------------------------------------------------------------------
    # Per-run job fetcher
    # ------------------------------------------------------------------
    def _run_repository(self, run: WorkflowRun) -> str:
        # The run's own repository is authoritative for org-scoped listings
        full_name = run.repository.full_name if run.repository else ""
        return full_name or self.scope.full_name

    async def fetch_jobs_for_run(self, run: WorkflowRun) -> List[Job]:
        repository = self._run_repository(run)
        parts = repository.split("/")
        if len(parts) != 2 or not all(parts):
            raise UpstreamError(
                f"workflow run {run.id} has no usable repository information ({repository!r})"
            )

        path = f"{repo_actions_base_path(parts[0], parts[1])}/runs/{run.id}/jobs"
        jobs: List[Job] = []
        page = 1
        while True:
            try:
                data = await get_json(
                    self.client, path, {"per_page": JOBS_PAGE_SIZE, "page": page}
                )
                batch = JobsResponse.model_validate(data)
            except (httpx.HTTPError, ValueError, ValidationError) as e:
                raise UpstreamError(f"failed to fetch jobs for run {run.id}: {e}") from e

            jobs.extend(to_job(j, run, repository) for j in batch.jobs)
            if len(batch.jobs) < JOBS_PAGE_SIZE or len(jobs) >= batch.total_count:
                return jobs
            page += 1

    async def _fetch_page_jobs(self, runs: List[WorkflowRun]) -> list:
        # One task per run; results come back in run order, errors as values
        return await asyncio.gather(
            *(self.fetch_jobs_for_run(run) for run in runs),
            return_exceptions=True,
        )

    # ------------------------------------------------------------------
    # JobRepository contract
    # ------------------------------------------------------------------
    async def fetch_job_history(self, runner_id: Optional[int], limit: int) -> List[Job]:
        if limit <= 0:
            return []

        target = limit if runner_id is not None else overfetch_limit(limit)
        collected: List[Job] = []
        runs_seen = 0
        skipped = 0
        last_error: Optional[Exception] = None

        async with aclosing(self.iter_workflow_run_pages()) as pages:
            async for page, runs in pages:
                results = await self._fetch_page_jobs(runs)
                runs_seen += len(runs)

                for run, result in zip(runs, results):
                    if isinstance(result, BaseException):
                        if not isinstance(result, RunnerLogError):
                            raise result
                        skipped += 1
                        last_error = result
                        logger.warning("Skipping run %d: %s", run.id, result)
                        continue
                    if runner_id is None:
                        collected.extend(result)
                    else:
                        collected.extend(j for j in result if j.is_assigned_to_runner(runner_id))

                if len(collected) >= target:
                    logger.info(
                        "Collected %d jobs after %d page(s); stopping early",
                        len(collected), page,
                    )
                    break

        if runs_seen and skipped == runs_seen:
            raise PartialUpstreamError(skipped, last_error) from last_error
        if skipped:
            logger.warning("Skipped %d of %d workflow runs; last error: %s", skipped, runs_seen, last_error)

        logger.info("Found %d jobs across %d workflow runs in %s", len(collected), runs_seen, self.scope)
        return collected
