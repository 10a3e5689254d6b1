"""
Runner Job History Model
Pairs a Runner with its jobs, newest start first. This is what the
formatters and the HTTP surface receive.
"""
from typing import List

from pydantic import BaseModel

from .job import Job
from .runner import Runner


class RunnerJobHistory(BaseModel):
    runner: Runner
    jobs: List[Job] = []
