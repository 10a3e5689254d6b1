"""
Unit Tests — Output Formatter
==============================
Table layout, duration labels and the lossless JSON round trip.
"""
from datetime import datetime, timedelta, timezone

import pytest

from runner_log.core.output_formatter import (
    OutputFormat,
    format_duration,
    format_history,
    format_json,
    format_table,
    job_duration_label,
    parse_json,
    started_label,
    truncate,
)
from runner_log.models.job import Job
from runner_log.models.runner import Runner
from runner_log.models.runner_job_history import RunnerJobHistory

T0 = datetime(2025, 11, 20, 12, 0, 0, tzinfo=timezone.utc)
RUNNER = Runner(id=42, name="gpu-box-1", os="Linux", status="online", labels=["self-hosted", "gpu"])


def _history():
    return RunnerJobHistory(runner=RUNNER, jobs=[
        Job(
            id=1001, run_id=1, name="build", workflow_name="A very long workflow name indeed",
            repository="acme-corp/a", status="completed", conclusion="success",
            runner_id=42, runner_name="gpu-box-1",
            started_at=T0 - timedelta(minutes=10), completed_at=T0 - timedelta(minutes=4, seconds=30),
            html_url="https://github.com/acme-corp/a/actions/runs/1/job/1001",
        ),
        Job(
            id=1002, run_id=2, name="test", workflow_name="CI", repository="acme-corp/b",
            status="in_progress", runner_id=42, started_at=T0 - timedelta(hours=2),
        ),
        Job(id=1003, run_id=3, name="lint", workflow_name="CI", status="queued", runner_id=42),
    ])


class TestDurations:

    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=42), "42s"),
        (timedelta(minutes=5, seconds=30), "5m 30s"),
        (timedelta(hours=2, minutes=15, seconds=9), "2h 15m"),
        (timedelta(0), "0s"),
    ])
    def test_format_duration(self, delta, expected):
        assert format_duration(delta) == expected

    def test_completed_job_uses_execution_duration(self):
        assert job_duration_label(_history().jobs[0]) == "5m 30s"

    def test_running_job_uses_elapsed_time(self):
        assert job_duration_label(_history().jobs[1], now=T0) == "2h 0m (running)"

    def test_unstarted_job_has_no_duration(self):
        assert job_duration_label(_history().jobs[2]) == "-"


class TestTable:

    def test_header_and_rows(self):
        output = format_table(_history(), now=T0)

        assert output.startswith("Runner: gpu-box-1 (ID: 42)\n")
        assert "Labels: self-hosted, gpu\n" in output
        assert "Job History (3 jobs):" in output
        assert "A very long workf..." in output
        assert "1003" in output
        # queued job has no conclusion
        assert any(line.startswith("1003") and " - " in line for line in output.splitlines())

    def test_empty_history(self):
        output = format_table(RunnerJobHistory(runner=RUNNER, jobs=[]))
        assert output.endswith("No jobs found for this runner.\n")

    def test_naive_start_treated_as_utc(self):
        aware = Job(id=1, run_id=1, status="completed", started_at=T0)
        naive = Job(id=1, run_id=1, status="completed", started_at=T0.replace(tzinfo=None))
        assert started_label(naive) == started_label(aware)

    def test_truncate(self):
        assert truncate("short", 20) == "short"
        assert truncate("x" * 25, 20) == "x" * 17 + "..."


class TestJson:

    def test_round_trip_preserves_runner_and_order(self):
        history = _history()

        restored = parse_json(format_json(history))

        assert restored == history
        assert [j.id for j in restored.jobs] == [1001, 1002, 1003]
        assert restored.jobs[2].started_at is None

    def test_dispatch(self):
        history = _history()
        assert format_history(history, "json") == format_json(history)
        assert format_history(history, OutputFormat.TABLE.value).startswith("Runner:")

    def test_interactive_is_not_text(self):
        with pytest.raises(ValueError):
            format_history(_history(), "interactive")
