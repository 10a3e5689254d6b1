"""
Scope Resolver
==============
Decides once per invocation whether we query an organization or a single
repository.

Priority:
    1. --org                       → organization scope
    2. --repo owner/repo           → repository scope
    3. live mode, ambient context  → repository of the current checkout
    4. fixture mode, nothing given → empty scope (match everything)
"""
import logging
from typing import Callable, Optional, Tuple

from runner_log.core.errors import ConfigurationError, InvalidInputError
from runner_log.models.scope import Scope
from runner_log.services.github_client import detect_repository_context

logger = logging.getLogger(__name__)

RepoContextDetector = Callable[[], Optional[Tuple[str, str]]]


def parse_repository(value: str) -> Tuple[str, str]:
    """Split 'owner/repo' into its parts."""
    parts = value.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidInputError(
            f"invalid repository format '{value}', expected owner/repo"
        )
    return parts[0], parts[1]


def resolve_scope(
    org: str = "",
    repo: str = "",
    use_ambient_context: bool = True,
    detect_context: RepoContextDetector = detect_repository_context,
) -> Scope:
    """
    Resolve the query scope.

    Parameters
    ----------
    org : str
        Organization name; wins over everything else.
    repo : str
        "owner/repo" string.
    use_ambient_context : bool
        False in fixture mode, where an empty scope is allowed.
    detect_context : callable
        Returns (owner, repo) of the ambient checkout or None.
    """
    org = (org or "").strip()
    repo = (repo or "").strip()

    if org:
        scope = Scope(org=org)
    elif repo:
        owner, name = parse_repository(repo)
        scope = Scope(owner=owner, repo=name)
    elif use_ambient_context:
        context = detect_context()
        if context is None:
            raise ConfigurationError(
                "failed to detect current repository context; "
                "please specify either --repo owner/repo or --org organization-name"
            )
        scope = Scope(owner=context[0], repo=context[1])
    else:
        scope = Scope()

    logger.debug("Resolved scope: %s", scope)
    return scope
