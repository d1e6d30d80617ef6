"""Publish outcome and API response models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PublishStatus(str, Enum):
    """Final status of one publish attempt."""

    PUBLISHED = "published"
    ALREADY_UP_TO_DATE = "already_up_to_date"
    PULL_REQUEST_NOT_FOUND = "pull_request_not_found"
    NO_ARTIFACTS = "no_artifacts"
    FAILED = "failed"


class PublishOutcome(BaseModel):
    """Result of publishing an artifact link for a workflow run."""

    status: PublishStatus
    message: str
    pull_number: Optional[int] = None
    artifact_id: Optional[int] = None
    body: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == PublishStatus.PUBLISHED


class WebhookResponse(BaseModel):
    """Response from webhook handler."""

    status: str
    message: str
