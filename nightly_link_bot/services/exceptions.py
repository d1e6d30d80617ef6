"""Exceptions raised while publishing an artifact link."""

from typing import Optional

from nightly_link_bot.models.outcome import PublishStatus


class ArtifactLinkError(Exception):
    """Base exception; ``status`` is the outcome reported for it."""

    status = PublishStatus.FAILED


class PullRequestNotFound(ArtifactLinkError):
    """No open pull request has the run's head commit."""

    status = PublishStatus.PULL_REQUEST_NOT_FOUND

    def __init__(self, sha: str, head_filter: Optional[str] = None):
        self.sha = sha
        self.head_filter = head_filter
        super().__init__(f"No matching pull request found for commit sha of {sha}")


class NoArtifacts(ArtifactLinkError):
    """The workflow run uploaded no artifacts."""

    status = PublishStatus.NO_ARTIFACTS

    def __init__(self, run_id: int):
        self.run_id = run_id
        super().__init__("No artifacts found, perhaps Build Template was skipped")


class AlreadyUpToDate(ArtifactLinkError):
    """The pull request body already links the artifact for this commit."""

    status = PublishStatus.ALREADY_UP_TO_DATE

    def __init__(self, sha: str):
        self.sha = sha
        super().__init__("Comment is already up-to-date!")


class GitHubAPIError(ArtifactLinkError):
    """Non-success response from the GitHub REST API."""

    def __init__(self, status_code: int, message: str, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"GitHub API returned {status_code}: {message}")
