"""Pull request data models."""

from typing import Optional

from pydantic import BaseModel


class PullRequestHead(BaseModel):
    """Head commit of a pull request."""

    sha: str
    ref: Optional[str] = None


class PullRequest(BaseModel):
    """Pull request as returned by the GitHub REST API (consumed fields only)."""

    number: int
    body: Optional[str] = None
    head: PullRequestHead
    html_url: Optional[str] = None
