"""
Command-line interface for runner-log.

View the job execution history of a GitHub Actions self-hosted runner.
"""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from runner_log.core.config import DEFAULT_MAX_COUNT, DEFAULT_SINCE, RunnerLogConfig
from runner_log.core.errors import RunnerLogError
from runner_log.core.output_formatter import (
    OutputFormat,
    format_history,
    job_duration_label,
    started_label,
)
from runner_log.models.runner_job_history import RunnerJobHistory
from runner_log.services.bootstrap import fetch_history
from runner_log.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="View job execution history for GitHub Actions self-hosted runners.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def render_interactive(history: RunnerJobHistory) -> Optional[str]:
    """Show a numbered job list and return the URL of the chosen job."""
    runner = history.runner
    console.print(f"[bold]{runner.name}[/bold] (ID: {runner.id}) {runner.status} {runner.os}")
    if not history.jobs:
        console.print("No jobs found for this runner.")
        return None

    table = Table(show_lines=False, header_style="bold blue", border_style="blue")
    for column in ("#", "Job", "Workflow", "Repository", "Status", "Started", "Duration"):
        table.add_column(column)
    for index, job in enumerate(history.jobs, start=1):
        table.add_row(
            str(index),
            job.name,
            job.workflow_name,
            job.repository,
            job.conclusion or job.status,
            started_label(job),
            job_duration_label(job),
        )
    console.print(table)

    choice = typer.prompt("Open job # in browser (0 to quit)", default=0, type=int)
    if 1 <= choice <= len(history.jobs):
        return history.jobs[choice - 1].html_url or None
    return None


@app.command()
def main(
    runner_name: str = typer.Argument(..., help="Name of the self-hosted runner."),
    org: str = typer.Option("", "--org", help="Fetch runner logs for an organization."),
    repo: str = typer.Option("", "--repo", help="Fetch runner logs for a specific repository (owner/repo)."),
    max_count: int = typer.Option(DEFAULT_MAX_COUNT, "--max-count", "-n", help="Maximum number of jobs to display."),
    since: str = typer.Option(DEFAULT_SINCE, "--since", help="Show jobs created since this time (e.g. '24h', '2d', '1w', RFC3339 or YYYY-MM-DD)."),
    debug: Optional[str] = typer.Option(None, "--debug", help="Path to debug JSON file (bypasses the GitHub API)."),
    output_format: OutputFormat = typer.Option(OutputFormat.INTERACTIVE, "--format", "-f", help="Output format."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
) -> None:
    """Show the most recent jobs executed by RUNNER_NAME."""
    setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    config = RunnerLogConfig(
        runner_name=runner_name,
        org=org,
        repo=repo,
        max_count=max_count,
        since=since,
        debug_file=debug,
        output_format=output_format.value,
    )

    try:
        if output_format is OutputFormat.INTERACTIVE:
            with err_console.status("Fetching job history..."):
                history = asyncio.run(fetch_history(config))
        else:
            history = asyncio.run(fetch_history(config))
    except RunnerLogError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    if output_format is OutputFormat.INTERACTIVE:
        url = render_interactive(history)
        if url:
            webbrowser.open(url)
        return

    typer.echo(format_history(history, output_format.value).rstrip("\n"))


if __name__ == "__main__":
    app()
