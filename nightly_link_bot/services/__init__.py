"""Business logic services package."""

from nightly_link_bot.services.exceptions import (
    ArtifactLinkError,
    PullRequestNotFound,
    NoArtifacts,
    AlreadyUpToDate,
    GitHubAPIError,
)
from nightly_link_bot.services.github_client import GitHubClient
from nightly_link_bot.services.pr_locator import PullRequestLocator
from nightly_link_bot.services.artifact_selector import ArtifactSelector
from nightly_link_bot.services.comment_upsert import (
    CommentUpsert,
    BodySections,
    build_marker,
    compose_body,
    extract_commit_sha,
    split_at_marker,
)
from nightly_link_bot.services.message_renderer import render_artifact_message
from nightly_link_bot.services.artifact_link_publisher import ArtifactLinkPublisher

__all__ = [
    'ArtifactLinkError',
    'PullRequestNotFound',
    'NoArtifacts',
    'AlreadyUpToDate',
    'GitHubAPIError',
    'GitHubClient',
    'PullRequestLocator',
    'ArtifactSelector',
    'CommentUpsert',
    'BodySections',
    'build_marker',
    'compose_body',
    'extract_commit_sha',
    'split_at_marker',
    'render_artifact_message',
    'ArtifactLinkPublisher',
]
