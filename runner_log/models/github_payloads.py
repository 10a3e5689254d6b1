"""
GitHub Payload Models
=====================
Pydantic models for the subset of the GitHub Actions REST responses the
pipeline reads. Unknown fields are ignored.

    GET {scope}/actions/runs             → WorkflowRunsResponse
    GET repos/{o}/{r}/actions/runs/{id}/jobs → JobsResponse
    GET {scope}/actions/runners          → RunnersResponse
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class RepositoryInfo(BaseModel):
    id: Optional[int] = None
    name: str = ""
    full_name: str = ""


class WorkflowRun(BaseModel):
    """Transient: only drives the per-run job fetch."""
    id: int
    name: str = ""
    status: str = ""
    conclusion: Optional[str] = None
    created_at: Optional[datetime] = None
    repository: Optional[RepositoryInfo] = None
    html_url: str = ""


class WorkflowRunsResponse(BaseModel):
    total_count: int = 0
    workflow_runs: List[WorkflowRun] = []


class JobPayload(BaseModel):
    id: int
    run_id: int
    run_attempt: int = 1
    name: str = ""
    status: str = ""
    conclusion: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    runner_id: Optional[int] = None
    runner_name: Optional[str] = None
    html_url: Optional[str] = None

    @field_validator("runner_id")
    @classmethod
    def unassigned_runner(cls, v: Optional[int]) -> Optional[int]:
        # GitHub reports 0 for jobs no runner has picked up yet
        return v or None


class JobsResponse(BaseModel):
    total_count: int = 0
    jobs: List[JobPayload] = []


class LabelPayload(BaseModel):
    id: Optional[int] = None
    name: str
    type: str = ""


class RunnerPayload(BaseModel):
    id: int
    name: str
    os: str = ""
    status: str = ""
    labels: List[LabelPayload] = []


class RunnersResponse(BaseModel):
    total_count: int = 0
    runners: List[RunnerPayload] = []
