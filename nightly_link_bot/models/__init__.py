"""Data models for the nightly link bot."""

from .artifact import Artifact
from .outcome import PublishOutcome, PublishStatus, WebhookResponse
from .pull_request import PullRequest, PullRequestHead
from .repository import RenderContext, RepositoryRef
from .workflow_run import (
    CommitIdentity,
    EventRepository,
    HeadRepository,
    WorkflowRun,
    WorkflowRunEvent,
)

__all__ = [
    # Event models
    "CommitIdentity",
    "HeadRepository",
    "WorkflowRun",
    "EventRepository",
    "WorkflowRunEvent",
    # GitHub entities
    "PullRequest",
    "PullRequestHead",
    "Artifact",
    # Context models
    "RepositoryRef",
    "RenderContext",
    # Results
    "PublishStatus",
    "PublishOutcome",
    "WebhookResponse",
]
