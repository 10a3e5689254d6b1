"""
Job Model
=========
One execution of a single job inside a workflow run.

Fields:
    id              — job ID
    run_id          — parent workflow run ID
    run_attempt     — attempt number of the parent run
    name            — job display name
    workflow_name   — name of the workflow the run belongs to
    repository      — "owner/repo" the run executed in
    status          — queued / in_progress / completed
    conclusion      — outcome, empty until completed
    runner_id       — None until a runner claims the job
    runner_name     — None until a runner claims the job
    started_at      — None until the job starts
    completed_at    — None until the job finishes
    html_url        — browsable job URL
"""
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Job(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    run_id: int
    run_attempt: int = 1
    name: str = ""
    workflow_name: str = ""
    repository: str = ""
    status: str = ""
    conclusion: str = ""
    runner_id: Optional[int] = None
    runner_name: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    html_url: str = ""

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    def is_assigned_to_runner(self, runner_id: int) -> bool:
        return self.runner_id is not None and self.runner_id == runner_id

    @property
    def execution_duration(self) -> timedelta:
        """completed_at - started_at, or zero when either is missing."""
        if self.started_at is None or self.completed_at is None:
            return timedelta(0)
        return self.completed_at - self.started_at
