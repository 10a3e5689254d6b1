"""
Shared fixtures: an in-process fake of the GitHub Actions REST API
served through httpx.MockTransport.
"""
import re
from datetime import datetime, timedelta, timezone

import httpx
import pytest

BASE_URL = "https://api.github.test"

_JOBS_PATH_RE = re.compile(r"^/repos/([^/]+)/([^/]+)/actions/runs/(\d+)/jobs$")

T0 = datetime(2025, 11, 20, 0, 0, 0, tzinfo=timezone.utc)


def iso(dt):
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ") if dt else None


def make_run(run_id, repo="acme-corp/app", name="CI"):
    return {
        "id": run_id,
        "name": name,
        "status": "completed",
        "conclusion": "success",
        "created_at": iso(T0),
        "repository": {"id": 1, "name": repo.split("/")[-1], "full_name": repo},
        "html_url": f"https://github.com/{repo}/actions/runs/{run_id}",
    }


def make_job(job_id, run_id, runner_id=None, started_at=None, completed_at=None, status="completed"):
    return {
        "id": job_id,
        "run_id": run_id,
        "run_attempt": 1,
        "name": f"job-{job_id}",
        "status": status,
        "conclusion": "success" if status == "completed" else None,
        "started_at": iso(started_at),
        "completed_at": iso(completed_at),
        "runner_id": runner_id,
        "runner_name": f"runner-{runner_id}" if runner_id else None,
        "html_url": f"https://github.com/acme-corp/app/actions/runs/{run_id}/job/{job_id}",
    }


class FakeGitHub:
    def __init__(self):
        self.run_pages = {}        # page number -> list of run dicts
        self.jobs = {}             # run id -> list of job dicts
        self.runners = []
        self.failing_pages = set()
        self.failing_runs = set()
        self.requests = []

    def add_runs(self, page, runs):
        self.run_pages[page] = runs

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        params = request.url.params
        page = int(params.get("page", 1))
        per_page = int(params.get("per_page", 30))

        if path.endswith("/actions/runs"):
            if page in self.failing_pages:
                return httpx.Response(500, json={"message": "boom"})
            runs = self.run_pages.get(page, [])
            total = sum(len(r) for r in self.run_pages.values())
            return httpx.Response(200, json={"total_count": total, "workflow_runs": runs})

        match = _JOBS_PATH_RE.match(path)
        if match:
            run_id = int(match.group(3))
            if run_id in self.failing_runs:
                return httpx.Response(404, json={"message": "Not Found"})
            jobs = self.jobs.get(run_id, [])
            chunk = jobs[(page - 1) * per_page: page * per_page]
            return httpx.Response(200, json={"total_count": len(jobs), "jobs": chunk})

        if path.endswith("/actions/runners"):
            chunk = self.runners[(page - 1) * per_page: page * per_page]
            return httpx.Response(200, json={"total_count": len(self.runners), "runners": chunk})

        return httpx.Response(404, json={"message": "Not Found"})

    def client(self):
        return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(self.handler))

    def paths(self, suffix):
        return [r for r in self.requests if r.url.path.endswith(suffix)]


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def hours_ago():
    def _at(hours):
        return T0 - timedelta(hours=hours)
    return _at
