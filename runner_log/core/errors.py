"""
Errors
======
Exception taxonomy for the runner job-history pipeline.

    ConfigurationError    — missing/ambiguous scope, unusable credentials,
                            unusable fixture file
    InvalidInputError     — malformed owner/repo string or time window
    RunnerNotFoundError   — runner name has no match in the scope
    UpstreamError         — a workflow-run listing page could not be read
    PartialUpstreamError  — every per-run job fetch failed

All of them derive from RunnerLogError so the CLI and the API can catch
the whole family at the boundary.
"""
from typing import Optional


class RunnerLogError(Exception):
    """Base class for all runner-log failures."""


class ConfigurationError(RunnerLogError):
    pass


class InvalidInputError(RunnerLogError):
    pass


class RunnerNotFoundError(RunnerLogError):
    def __init__(self, name: str) -> None:
        super().__init__(f"runner '{name}' not found")
        self.name = name


class UpstreamError(RunnerLogError):
    """A paginated listing request failed; carries the page number."""

    def __init__(self, message: str, page: Optional[int] = None) -> None:
        super().__init__(message)
        self.page = page


class PartialUpstreamError(RunnerLogError):
    """
    Raised only when every per-run job fetch failed and nothing was
    collected. Individual failures are otherwise logged and skipped.
    """

    def __init__(self, skipped_runs: int, last_error: Optional[BaseException]) -> None:
        super().__init__(
            f"failed to fetch jobs for all {skipped_runs} workflow runs: {last_error}"
        )
        self.skipped_runs = skipped_runs
        self.last_error = last_error
