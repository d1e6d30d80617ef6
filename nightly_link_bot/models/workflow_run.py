"""Workflow run event data models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CommitIdentity(BaseModel):
    """Identifies a pushed commit: the branch and fork it was pushed to."""

    model_config = ConfigDict(frozen=True)

    branch: Optional[str] = None
    repository_name: Optional[str] = None
    sha: str

    @property
    def head_filter(self) -> str:
        """Value for the ``head`` filter of the pull request listing."""
        repository_name = self.repository_name if self.repository_name is not None else "null"
        branch = self.branch if self.branch is not None else "null"
        return f"{repository_name}:{branch}"


class HeadRepository(BaseModel):
    """Repository the run's head commit was pushed to."""

    name: Optional[str] = None
    full_name: Optional[str] = None


class WorkflowRun(BaseModel):
    """The subset of a workflow run consumed by the publisher."""

    id: int
    name: Optional[str] = None
    head_branch: Optional[str] = None
    head_sha: str
    head_repository: Optional[HeadRepository] = None
    html_url: Optional[str] = None
    conclusion: Optional[str] = None

    def head_identity(self) -> CommitIdentity:
        return CommitIdentity(
            branch=self.head_branch,
            repository_name=self.head_repository.name if self.head_repository else None,
            sha=self.head_sha,
        )


class EventRepository(BaseModel):
    """Repository that delivered the event."""

    full_name: str


class WorkflowRunEvent(BaseModel):
    """``workflow_run`` webhook payload."""

    action: Optional[str] = None
    workflow_run: WorkflowRun
    repository: Optional[EventRepository] = None
