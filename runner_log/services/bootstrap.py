"""
Bootstrap
=========
Wires a RunnerLogConfig into a RunnerHistoryService and runs it.

    config ─► resolve_scope ─► parse_since ─► repositories ─► service
                                              (GitHub or fixture)
"""
import asyncio
import logging
from datetime import datetime
from typing import Optional

import httpx

from runner_log.core.config import RunnerLogConfig
from runner_log.models.runner_job_history import RunnerJobHistory
from runner_log.services.fixture_repository import load_fixture_repositories
from runner_log.services.github_client import create_github_client
from runner_log.services.github_job_repository import GitHubJobRepository
from runner_log.services.github_runner_repository import GitHubRunnerRepository
from runner_log.services.runner_history import RunnerHistoryService
from runner_log.services.scope_resolver import resolve_scope
from runner_log.utils.since_parser import parse_since

logger = logging.getLogger(__name__)


async def fetch_history(
    config: RunnerLogConfig,
    client: Optional[httpx.AsyncClient] = None,
    now: Optional[datetime] = None,
) -> RunnerJobHistory:
    """
    Run one invocation end to end.

    Parameters
    ----------
    config : RunnerLogConfig
        Per-invocation options.
    client : httpx.AsyncClient, optional
        Pre-built client; one is created (and closed) when omitted.
    now : datetime, optional
        Reference time for relative --since values.
    """
    scope = resolve_scope(
        org=config.org,
        repo=config.repo,
        use_ambient_context=not config.debug_enabled,
    )
    created_after = parse_since(config.since, now=now)
    logger.info("Querying %s for runner '%s' since %s", scope, config.runner_name, created_after.isoformat())

    if config.debug_enabled:
        job_repo, runner_repo = load_fixture_repositories(config.debug_file, scope, created_after)
        service = RunnerHistoryService(job_repo, runner_repo)
        return await service.fetch_runner_job_history(config.runner_name, config.max_count)

    owns_client = client is None
    if client is None:
        # token lookup may shell out to `gh auth token`
        client = await asyncio.to_thread(create_github_client)
    try:
        service = RunnerHistoryService(
            GitHubJobRepository(client, scope, created_after),
            GitHubRunnerRepository(client, scope),
        )
        return await service.fetch_runner_job_history(config.runner_name, config.max_count)
    finally:
        if owns_client:
            await client.aclose()
