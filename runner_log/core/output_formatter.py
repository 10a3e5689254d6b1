"""
Output Formatter
================
Turns a RunnerJobHistory into display strings.

    table        — runner header plus a fixed-width job table
    json         — lossless document; parse_json() reads it back
    interactive  — handled by the CLI (numbered list + open in browser)

Timestamps in the table are shown in local time; the JSON path keeps
the original ISO-8601 values.
"""
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from runner_log.models.job import Job
from runner_log.models.runner_job_history import RunnerJobHistory

TABLE_WIDTH = 120
_ROW = "{:<12} {:<20} {:<15} {:<15} {:<24} {:<30}\n"


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    INTERACTIVE = "interactive"


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_duration(d: timedelta) -> str:
    """'42s', '5m 30s' or '2h 15m'."""
    total = int(d.total_seconds())
    if total < 60:
        return f"{total}s"
    if total < 3600:
        return f"{total // 60}m {total % 60}s"
    return f"{total // 3600}h {(total % 3600) // 60}m"


def job_duration_label(job: Job, now: Optional[datetime] = None) -> str:
    if job.started_at is not None and job.completed_at is not None:
        return format_duration(job.execution_duration)
    if job.started_at is not None and job.status == "in_progress":
        now = now or datetime.now(timezone.utc)
        started = job.started_at
        if started.tzinfo is None:
            started = started.replace(tzinfo=timezone.utc)
        return format_duration(now - started) + " (running)"
    return "-"


def started_label(job: Job) -> str:
    if job.started_at is None:
        return "-"
    started = job.started_at
    if started.tzinfo is None:
        started = started.replace(tzinfo=timezone.utc)
    return started.astimezone().strftime("%Y-%m-%d %H:%M:%S %Z")


def format_table(history: RunnerJobHistory, now: Optional[datetime] = None) -> str:
    runner = history.runner
    lines = [
        f"Runner: {runner.name} (ID: {runner.id})\n",
        f"Status: {runner.status}\n",
        f"OS: {runner.os}\n",
        f"Labels: {', '.join(runner.labels)}\n",
        "\n",
    ]

    if not history.jobs:
        lines.append("No jobs found for this runner.\n")
        return "".join(lines)

    lines.append(f"Job History ({len(history.jobs)} jobs):\n")
    lines.append("=" * TABLE_WIDTH + "\n")
    lines.append(_ROW.format("JOB ID", "WORKFLOW", "STATUS", "CONCLUSION", "STARTED AT", "DURATION"))
    lines.append("-" * TABLE_WIDTH + "\n")
    for job in history.jobs:
        lines.append(_ROW.format(
            str(job.id),
            truncate(job.workflow_name, 20),
            job.status,
            job.conclusion or "-",
            started_label(job),
            job_duration_label(job, now),
        ))
    lines.append("=" * TABLE_WIDTH + "\n")
    return "".join(lines)


def format_json(history: RunnerJobHistory) -> str:
    return history.model_dump_json(indent=2)


def parse_json(text: str) -> RunnerJobHistory:
    return RunnerJobHistory.model_validate_json(text)


def format_history(history: RunnerJobHistory, output_format: str) -> str:
    """Dispatch for the non-interactive formats."""
    fmt = OutputFormat(output_format)
    if fmt is OutputFormat.JSON:
        return format_json(history)
    if fmt is OutputFormat.TABLE:
        return format_table(history)
    raise ValueError(f"format '{output_format}' cannot be rendered as text")
