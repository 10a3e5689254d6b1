"""
GitHub Runner Repository
========================
Resolves a runner name to its Runner record through
GET {scope}/actions/runners.
"""
import logging
from typing import List

import httpx
from pydantic import ValidationError

from runner_log.core.constants import RUNNERS_PAGE_SIZE
from runner_log.core.errors import RunnerNotFoundError, UpstreamError
from runner_log.models.github_payloads import RunnerPayload, RunnersResponse
from runner_log.models.runner import Runner
from runner_log.models.scope import Scope
from runner_log.services.github_client import get_json

logger = logging.getLogger(__name__)


def to_runner(payload: RunnerPayload) -> Runner:
    return Runner(
        id=payload.id,
        name=payload.name,
        os=payload.os,
        status=payload.status,
        labels=[label.name for label in payload.labels],
    )


class GitHubRunnerRepository:
    def __init__(
        self,
        client: httpx.AsyncClient,
        scope: Scope,
        page_size: int = RUNNERS_PAGE_SIZE,
    ) -> None:
        self.client = client
        self.scope = scope
        self.page_size = page_size

    def _runners_path(self) -> str:
        return f"{self.scope.actions_base_path()}/runners"

    async def fetch_runners(self) -> List[Runner]:
        """All runners registered in the scope, across pages."""
        path = self._runners_path()
        runners: List[Runner] = []
        page = 1

        while True:
            try:
                data = await get_json(
                    self.client, path, {"per_page": self.page_size, "page": page}
                )
                batch = RunnersResponse.model_validate(data)
            except (httpx.HTTPError, ValueError, ValidationError) as e:
                raise UpstreamError(
                    f"failed to fetch runners for {self.scope} (page {page}): {e}",
                    page=page,
                ) from e

            runners.extend(to_runner(r) for r in batch.runners)
            if len(batch.runners) < self.page_size or len(runners) >= batch.total_count:
                break
            page += 1

        logger.debug("Fetched %d runners for %s", len(runners), self.scope)
        return runners

    async def fetch_runner_by_name(self, name: str) -> Runner:
        wanted = name.casefold()
        for runner in await self.fetch_runners():
            if runner.name.casefold() == wanted:
                return runner
        raise RunnerNotFoundError(name)
