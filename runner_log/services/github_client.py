"""
GitHub Client
=============
Builds the authenticated httpx client and discovers the ambient
repository context.

Credential lookup order:
    1. GITHUB_TOKEN / GH_TOKEN (environment or .env)
    2. `gh auth token` (GitHub CLI login)

Repository context lookup order:
    1. GH_REPO environment variable ("owner/repo")
    2. `git remote get-url origin` in the current directory
"""
import logging
import os
import re
import subprocess
from typing import Optional, Tuple

import httpx

from runner_log.core.config import GITHUB_API_URL, GITHUB_TOKEN, HTTP_TIMEOUT
from runner_log.core.constants import GITHUB_HEADERS
from runner_log.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

_REMOTE_RE = re.compile(r"github\.com[:/](.+?)(?:\.git)?$")


def extract_repo_path(remote_url: str) -> str:
    """Extract 'owner/repo' from a GitHub remote URL."""
    match = _REMOTE_RE.search(remote_url.strip())
    if match:
        return match.group(1).rstrip("/")
    return ""


def _run_quiet(args: list) -> Optional[str]:
    try:
        result = subprocess.run(args, check=True, capture_output=True, text=True)
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("Command %s failed: %s", args[0], e)
        return None
    return result.stdout.strip() or None


def resolve_token(token: Optional[str] = None) -> str:
    """
    Return a GitHub token or raise ConfigurationError with login guidance.
    """
    token = token or GITHUB_TOKEN or _run_quiet(["gh", "auth", "token"])
    if not token:
        raise ConfigurationError(
            "failed to create REST client: no GitHub credentials found\n"
            "Please run 'gh auth login' to authenticate with GitHub "
            "or set GITHUB_TOKEN"
        )
    return token


def create_github_client(
    token: Optional[str] = None,
    base_url: str = GITHUB_API_URL,
    timeout: float = HTTP_TIMEOUT,
) -> httpx.AsyncClient:
    """Create the pre-authenticated client shared by the repositories."""
    headers = dict(GITHUB_HEADERS)
    headers["Authorization"] = f"Bearer {resolve_token(token)}"
    return httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout)


def detect_repository_context() -> Optional[Tuple[str, str]]:
    """
    Return (owner, repo) for the current working directory, or None.
    """
    candidate = os.getenv("GH_REPO", "").strip()
    if not candidate:
        remote = _run_quiet(["git", "remote", "get-url", "origin"])
        candidate = extract_repo_path(remote) if remote else ""

    parts = candidate.split("/")
    if len(parts) != 2 or not all(parts):
        return None
    return parts[0], parts[1]


async def get_json(client: httpx.AsyncClient, path: str, params: Optional[dict] = None) -> dict:
    """GET `path` and return the decoded JSON body; raises httpx errors."""
    response = await client.get(path, params=params)
    response.raise_for_status()
    return response.json()
