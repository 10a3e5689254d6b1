"""
Runner Model
Pydantic model for a registered self-hosted runner.
"""
from typing import List

from pydantic import BaseModel, ConfigDict


class Runner(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    os: str = ""
    status: str = ""
    labels: List[str] = []
