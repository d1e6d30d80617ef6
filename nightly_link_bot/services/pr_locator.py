"""
Pull Request Locator component.

Finds the open pull request whose head is the commit a workflow run built.
"""

from typing import Optional

from nightly_link_bot.models.pull_request import PullRequest
from nightly_link_bot.models.repository import RepositoryRef
from nightly_link_bot.models.workflow_run import CommitIdentity
from nightly_link_bot.services.github_client import GitHubClient
from nightly_link_bot.utils.logging import get_logger

logger = get_logger(__name__)


class PullRequestLocator:
    """Matches a pushed commit to its pull request."""

    def __init__(self, client: GitHubClient, repository: RepositoryRef):
        self.client = client
        self.repository = repository

    async def find(self, head: CommitIdentity) -> Optional[PullRequest]:
        """
        Find the pull request whose head commit is ``head.sha``.

        The branch filter narrows the listing to one branch/fork pairing, but a
        branch can be pushed several times, so only an exact SHA match
        identifies the push that triggered the run. Pages are scanned
        most-recently-updated first and the scan stops at the first match.

        Args:
            head: Branch, fork and commit of the run

        Returns:
            The matching pull request, or None if no listed pull request has
            that head commit
        """
        logger.debug(f"Looking up pull request for {head.head_filter} at {head.sha}")

        pages = self.client.iter_pull_requests(
            self.repository.owner,
            self.repository.repo,
            head=head.head_filter,
            sort="updated",
        )
        try:
            async for page in pages:
                for pull in page:
                    if pull.head.sha == head.sha:
                        logger.info(
                            f"Matched pull request {pull.number}",
                            extra={"pull_number": pull.number, "sha": head.sha},
                        )
                        return pull
        finally:
            await pages.aclose()

        logger.warning(
            f"No pull request matches {head.head_filter} at {head.sha}",
            extra={"sha": head.sha},
        )
        return None
