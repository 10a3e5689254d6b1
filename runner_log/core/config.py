"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    GITHUB_TOKEN             — REST API token (GH_TOKEN is accepted too)
    GITHUB_API_URL           — API base URL (default: https://api.github.com)
    RUNNER_LOG_MAX_COUNT     — Default number of jobs to show (default: 5)
    RUNNER_LOG_SINCE         — Default time window (default: 24h)
    RUNNER_LOG_HTTP_TIMEOUT  — Per-request timeout in seconds (default: 20)

Per-invocation options (runner name, scope flags, limit, window, output
format) are collected once into a RunnerLogConfig at the CLI / API
boundary and handed to the pipeline. Nothing below the boundary reads
command-line state.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

GITHUB_TOKEN = os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
DEFAULT_MAX_COUNT = int(os.getenv("RUNNER_LOG_MAX_COUNT", 5))
DEFAULT_SINCE = os.getenv("RUNNER_LOG_SINCE", "24h")
HTTP_TIMEOUT = float(os.getenv("RUNNER_LOG_HTTP_TIMEOUT", 20.0))


@dataclass(frozen=True)
class RunnerLogConfig:
    """Options for a single runner-log invocation."""

    runner_name: str
    org: str = ""
    repo: str = ""
    max_count: int = DEFAULT_MAX_COUNT
    since: str = DEFAULT_SINCE
    debug_file: Optional[str] = None
    output_format: str = "interactive"

    @property
    def debug_enabled(self) -> bool:
        return bool(self.debug_file)
