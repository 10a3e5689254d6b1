"""
Runner Jobs Endpoint
====================
Route: GET /runners/{runner_name}/jobs

Query parameters:
    org    — organization scope
    repo   — owner/repo scope (used when org is empty)
    limit  — max jobs (default RUNNER_LOG_MAX_COUNT)
    since  — time window (default RUNNER_LOG_SINCE)

An explicit org or repo is required; the server has no ambient checkout.
"""
import logging

from fastapi import APIRouter, HTTPException

from runner_log.core.config import DEFAULT_MAX_COUNT, DEFAULT_SINCE, RunnerLogConfig
from runner_log.core.errors import (
    ConfigurationError,
    InvalidInputError,
    PartialUpstreamError,
    RunnerLogError,
    RunnerNotFoundError,
    UpstreamError,
)
from runner_log.models.runner_job_history import RunnerJobHistory
from runner_log.services.bootstrap import fetch_history

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Runners"])


def _status_for(error: RunnerLogError) -> int:
    if isinstance(error, RunnerNotFoundError):
        return 404
    if isinstance(error, (UpstreamError, PartialUpstreamError)):
        return 502
    if isinstance(error, (ConfigurationError, InvalidInputError)):
        return 400
    return 500


@router.get("/runners/{runner_name}/jobs", response_model=RunnerJobHistory)
async def get_runner_jobs(
    runner_name: str,
    org: str = "",
    repo: str = "",
    limit: int = DEFAULT_MAX_COUNT,
    since: str = DEFAULT_SINCE,
) -> RunnerJobHistory:
    if not org and not repo:
        raise HTTPException(
            status_code=400,
            detail="no repository context; supply either org or repo (owner/repo)",
        )

    config = RunnerLogConfig(
        runner_name=runner_name,
        org=org,
        repo=repo,
        max_count=limit,
        since=since,
        output_format="json",
    )
    try:
        return await fetch_history(config)
    except RunnerLogError as e:
        logger.error("Runner jobs request failed: %s", e)
        raise HTTPException(status_code=_status_for(e), detail=str(e))
