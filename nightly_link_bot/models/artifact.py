"""Workflow artifact data models."""

from typing import Optional

from pydantic import BaseModel


class Artifact(BaseModel):
    """Artifact uploaded by a workflow run."""

    id: int
    name: str
    size_in_bytes: Optional[int] = None
    expired: Optional[bool] = None
