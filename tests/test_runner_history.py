"""
Runner History Service Tests
============================
Filtering by runner ID, newest-first ordering, limit truncation and the
zero-limit fast path. Repositories are mocked.
"""
import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import T0
from runner_log.core.errors import PartialUpstreamError, RunnerNotFoundError
from runner_log.models.job import Job
from runner_log.models.runner import Runner
from runner_log.services.runner_history import RunnerHistoryService, sort_jobs_by_start


def _job(job_id, runner_id, hours=None):
    started = T0 - timedelta(hours=hours) if hours is not None else None
    return Job(id=job_id, run_id=1, runner_id=runner_id, started_at=started)


def _service(runner, jobs=None, job_error=None, runner_error=None):
    runner_repo = MagicMock()
    runner_repo.fetch_runner_by_name = AsyncMock(return_value=runner, side_effect=runner_error)
    job_repo = MagicMock()
    job_repo.fetch_job_history = AsyncMock(return_value=jobs or [], side_effect=job_error)
    return RunnerHistoryService(job_repo, runner_repo), job_repo, runner_repo


GPU_BOX = Runner(id=42, name="gpu-box-1", os="Linux", status="online", labels=["self-hosted", "gpu"])


def test_filters_orders_and_truncates():
    jobs = [
        _job(1, 42, hours=3),
        _job(2, 7, hours=0.5),
        _job(3, 42, hours=1),
        _job(4, 99, hours=1.5),
        _job(5, 42, hours=2),
    ]
    service, job_repo, _ = _service(GPU_BOX, jobs)

    history = asyncio.run(service.fetch_runner_job_history("gpu-box-1", 2))

    assert history.runner == GPU_BOX
    assert [j.id for j in history.jobs] == [3, 5]
    job_repo.fetch_job_history.assert_awaited_once_with(42, 2)


def test_every_returned_job_belongs_to_runner():
    jobs = [_job(i, 42 if i % 2 else 7, hours=i) for i in range(10)]
    service, _, _ = _service(GPU_BOX, jobs)

    history = asyncio.run(service.fetch_runner_job_history("gpu-box-1", 100))

    assert len(history.jobs) == 5
    assert all(j.runner_id == 42 for j in history.jobs)


@pytest.mark.parametrize("limit", [0, -1, -50])
def test_non_positive_limit_skips_job_fetch(limit):
    service, job_repo, _ = _service(GPU_BOX, [_job(1, 42, hours=1)])

    history = asyncio.run(service.fetch_runner_job_history("gpu-box-1", limit))

    assert history.jobs == []
    assert history.runner == GPU_BOX
    job_repo.fetch_job_history.assert_not_awaited()


def test_count_is_min_of_limit_and_available():
    service, _, _ = _service(GPU_BOX, [_job(1, 42, hours=1), _job(2, 42, hours=2)])
    history = asyncio.run(service.fetch_runner_job_history("gpu-box-1", 10))
    assert len(history.jobs) == 2


def test_runner_not_found_propagates():
    service, job_repo, _ = _service(None, runner_error=RunnerNotFoundError("ghost"))

    with pytest.raises(RunnerNotFoundError, match="runner 'ghost' not found"):
        asyncio.run(service.fetch_runner_job_history("ghost", 5))
    job_repo.fetch_job_history.assert_not_awaited()


def test_job_error_propagates():
    error = PartialUpstreamError(3, RuntimeError("gone"))
    service, _, _ = _service(GPU_BOX, job_error=error)

    with pytest.raises(PartialUpstreamError) as exc_info:
        asyncio.run(service.fetch_runner_job_history("gpu-box-1", 5))
    assert exc_info.value.skipped_runs == 3


# ===================================================================
# Ordering
# ===================================================================
def test_jobs_without_start_sort_last_in_input_order():
    jobs = [
        _job(1, 42),
        _job(2, 42, hours=5),
        _job(3, 42),
        _job(4, 42, hours=1),
    ]

    ordered = sort_jobs_by_start(jobs)

    assert [j.id for j in ordered] == [4, 2, 1, 3]


def test_sort_is_non_increasing():
    jobs = [_job(i, 42, hours=h) for i, h in enumerate([4, 1, 9, 1, 0, 6])]
    starts = [j.started_at for j in sort_jobs_by_start(jobs)]
    assert starts == sorted(starts, reverse=True)


def test_sort_handles_naive_and_aware_timestamps():
    aware = Job(id=1, run_id=1, started_at=T0)
    naive = Job(id=2, run_id=1, started_at=(T0 + timedelta(hours=1)).replace(tzinfo=None))
    assert [j.id for j in sort_jobs_by_start([aware, naive])] == [2, 1]
