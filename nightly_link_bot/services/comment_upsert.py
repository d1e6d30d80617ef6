"""
Comment Upsert component.

Keeps one bot-managed section at the end of a pull request body. The section
starts at a hidden marker; text before the marker belongs to the author and
is kept verbatim, everything from the marker on is replaced on each update.
"""

import re
from typing import NamedTuple, Optional

from nightly_link_bot.models.pull_request import PullRequest
from nightly_link_bot.models.repository import RepositoryRef
from nightly_link_bot.services.exceptions import AlreadyUpToDate
from nightly_link_bot.services.github_client import GitHubClient
from nightly_link_bot.utils.logging import get_logger

logger = get_logger(__name__)

MARKER_NOTICE = "<!-- DO NOT REMOVE!! -->"

COMMIT_SHA_PATTERN = re.compile(r"<!-- commit-sha: (?P<sha>[a-z0-9]+) -->", re.IGNORECASE)


class BodySections(NamedTuple):
    """A body split around the bot marker."""

    prefix: str
    marker_present: bool
    suffix: str


def purpose_line(purpose: str) -> str:
    return f"<!-- bot: {purpose} -->"


def build_marker(purpose: str) -> str:
    """Marker written in front of the section managed for ``purpose``."""
    return f"\r\n{MARKER_NOTICE}\r\n{purpose_line(purpose)}\r\n"


def _newline_end(body: str, pos: int) -> Optional[int]:
    """End index of a line break starting at ``pos``, if there is one."""
    if body.startswith("\r\n", pos):
        return pos + 2
    if body.startswith("\n", pos):
        return pos + 1
    return None


def _newline_start(body: str, pos: int) -> Optional[int]:
    """Start index of a line break ending at ``pos``; the body start counts."""
    if pos == 0:
        return 0
    if body[pos - 1] != "\n":
        return None
    if pos >= 2 and body[pos - 2] == "\r":
        return pos - 2
    return pos - 1


def split_at_marker(body: Optional[str], purpose: str) -> BodySections:
    """
    Split ``body`` at the first marker for ``purpose``.

    Line breaks inside the marker may be ``\\r\\n`` or ``\\n`` (editing a body
    in the browser or through the API can change them). The break before the
    marker may also be the start of the body and the break after it the end.

    Returns:
        BodySections; when no marker is found the whole body is the prefix
    """
    body = body or ""
    bot_line = purpose_line(purpose)
    search_from = 0

    while True:
        index = body.find(MARKER_NOTICE, search_from)
        if index == -1:
            return BodySections(prefix=body, marker_present=False, suffix="")
        search_from = index + 1

        start = _newline_start(body, index)
        if start is None:
            continue

        bot_start = _newline_end(body, index + len(MARKER_NOTICE))
        if bot_start is None or not body.startswith(bot_line, bot_start):
            continue

        end = bot_start + len(bot_line)
        trailing = _newline_end(body, end)
        if trailing is not None:
            end = trailing
        elif end != len(body):
            continue

        return BodySections(prefix=body[:start], marker_present=True, suffix=body[end:])


def extract_commit_sha(body: Optional[str]) -> Optional[str]:
    """Return the commit SHA embedded in ``body`` by a previous update."""
    match = COMMIT_SHA_PATTERN.search(body or "")
    return match.group("sha") if match else None


def is_up_to_date(body: Optional[str], head_sha: str) -> bool:
    old_sha = extract_commit_sha(body)
    return old_sha is not None and old_sha == head_sha


def compose_body(prior_body: Optional[str], purpose: str, fragment: str) -> str:
    """Keep the text before the marker, then write the marker and ``fragment``."""
    sections = split_at_marker(prior_body, purpose)
    return sections.prefix + build_marker(purpose) + fragment


class CommentUpsert:
    """Writes a bot-managed section into a pull request description."""

    def __init__(self, client: GitHubClient, repository: RepositoryRef):
        self.client = client
        self.repository = repository

    async def upsert(
        self,
        pull_number: int,
        purpose: str,
        prior_body: Optional[str],
        fragment: str,
        head_sha: Optional[str] = None,
    ) -> PullRequest:
        """
        Replace the ``purpose`` section of a pull request body.

        The whole body is written back; a concurrent edit between reading
        ``prior_body`` and this call is lost.

        Args:
            pull_number: Pull request number
            purpose: Section tag, e.g. ``nightly-link``
            prior_body: Body as read with the pull request
            fragment: New section content
            head_sha: When given, skip the write if the body already embeds it

        Returns:
            The updated pull request

        Raises:
            AlreadyUpToDate: If ``head_sha`` is already embedded in the body
        """
        if head_sha is not None and is_up_to_date(prior_body, head_sha):
            raise AlreadyUpToDate(head_sha)

        body = compose_body(prior_body, purpose, fragment)
        replacing = split_at_marker(prior_body, purpose).marker_present

        logger.info(
            f"{'Replacing' if replacing else 'Appending'} "
            f"'{purpose}' section of pull request {pull_number}",
            extra={"pull_number": pull_number},
        )

        return await self.client.update_pull_request(
            self.repository.owner,
            self.repository.repo,
            pull_number,
            body,
        )
