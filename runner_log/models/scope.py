"""
Scope Model
===========
The query boundary: an organization, a single repository, or (fixture
mode only) an empty scope that matches every repository in the dataset.

The scope is resolved once per invocation and every API path is built
from it.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Scope:
    org: str = ""
    owner: str = ""
    repo: str = ""

    @property
    def is_organization(self) -> bool:
        return bool(self.org)

    @property
    def is_repository(self) -> bool:
        return not self.org and bool(self.owner) and bool(self.repo)

    @property
    def is_empty(self) -> bool:
        return not self.is_organization and not self.is_repository

    @property
    def full_name(self) -> str:
        """'owner/repo' for repository scope, empty otherwise."""
        if self.is_repository:
            return f"{self.owner}/{self.repo}"
        return ""

    def actions_base_path(self) -> str:
        """orgs/{org}/actions or repos/{owner}/{repo}/actions."""
        if self.is_organization:
            return f"orgs/{self.org}/actions"
        if self.is_repository:
            return repo_actions_base_path(self.owner, self.repo)
        raise ValueError("empty scope has no API path")

    def matches(self, repository: str) -> bool:
        """Whether a job from `repository` ("owner/repo") is in scope."""
        if self.is_organization:
            return repository.startswith(self.org + "/")
        if self.is_repository:
            return repository == self.full_name
        return True

    def __str__(self) -> str:
        if self.is_organization:
            return f"org:{self.org}"
        if self.is_repository:
            return f"repo:{self.full_name}"
        return "all"


def repo_actions_base_path(owner: str, repo: str) -> str:
    # Job listings are always repository-scoped, even for org-level runs
    return f"repos/{owner}/{repo}/actions"
