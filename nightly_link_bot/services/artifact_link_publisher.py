"""
Artifact Link Publisher.

Runs the whole pipeline for one completed workflow run: locate the pull
request, check whether its body is already current, pick the artifact,
render the section and write it into the pull request body.
"""

from typing import Optional

from nightly_link_bot.models.outcome import PublishOutcome, PublishStatus
from nightly_link_bot.models.repository import RenderContext, RepositoryRef
from nightly_link_bot.models.workflow_run import WorkflowRun
from nightly_link_bot.services.artifact_selector import ArtifactSelector
from nightly_link_bot.services.comment_upsert import CommentUpsert, is_up_to_date
from nightly_link_bot.services.exceptions import (
    AlreadyUpToDate,
    ArtifactLinkError,
    PullRequestNotFound,
)
from nightly_link_bot.services.github_client import GitHubClient
from nightly_link_bot.services.message_renderer import (
    DEFAULT_NIGHTLY_LINK_URL,
    render_artifact_message,
)
from nightly_link_bot.services.pr_locator import PullRequestLocator
from nightly_link_bot.utils.actions import StatusReporter
from nightly_link_bot.utils.logging import get_logger, log_error_with_context

logger = get_logger(__name__)

DEFAULT_PURPOSE = "nightly-link"


class ArtifactLinkPublisher:
    """Publishes the artifact of a workflow run into its pull request."""

    def __init__(
        self,
        client: GitHubClient,
        repository: RepositoryRef,
        reporter: StatusReporter,
        purpose: str = DEFAULT_PURPOSE,
        nightly_link_url: str = DEFAULT_NIGHTLY_LINK_URL,
    ):
        self.repository = repository
        self.reporter = reporter
        self.purpose = purpose
        self.nightly_link_url = nightly_link_url

        self.locator = PullRequestLocator(client, repository)
        self.selector = ArtifactSelector(client, repository)
        self.upserter = CommentUpsert(client, repository)

    async def publish(self, run: WorkflowRun, context: RenderContext) -> PublishOutcome:
        """
        Publish the run's artifact link.

        Every failure, including "nothing to do", is reported through
        ``reporter.set_failed`` and nothing is written afterwards.

        Args:
            run: Completed workflow run from the event
            context: Run that is doing the publishing, for the message callout

        Returns:
            PublishOutcome describing what happened
        """
        run_logger = logger.with_context(run_id=run.id, repository=self.repository.full_name)
        head = run.head_identity()
        pull_number: Optional[int] = None

        try:
            pull = await self.locator.find(head)
            if pull is None:
                raise PullRequestNotFound(head.sha, head.head_filter)

            pull_number = pull.number
            prior_body = pull.body or ""
            pull_head_sha = pull.head.sha

            self.reporter.info(f"Using pull request {pull_number}, with sha: {pull_head_sha}")

            # Checked before listing artifacts to save the API calls
            if is_up_to_date(prior_body, pull_head_sha):
                raise AlreadyUpToDate(pull_head_sha)

            artifact = await self.selector.select_primary(run.id)

            body = render_artifact_message(
                self.repository,
                artifact,
                pull_head_sha,
                context,
                nightly_link_url=self.nightly_link_url,
            )
            self.reporter.info(f"Review thread message body: \n{body}")

            await self.upserter.upsert(
                pull_number,
                self.purpose,
                prior_body,
                body,
                head_sha=pull_head_sha,
            )

        except ArtifactLinkError as e:
            if e.status == PublishStatus.FAILED:
                return self._fail(run_logger, e, pull_number)
            message = str(e)
            run_logger.warning(message, extra={"pull_number": pull_number, "outcome": e.status.value})
            self.reporter.set_failed(message)
            return PublishOutcome(status=e.status, message=message, pull_number=pull_number)

        except Exception as e:
            return self._fail(run_logger, e, pull_number)

        run_logger.info(
            f"Published artifact {artifact.id} to pull request {pull_number}",
            extra={"pull_number": pull_number, "sha": pull_head_sha},
        )
        return PublishOutcome(
            status=PublishStatus.PUBLISHED,
            message=f"Linked artifact {artifact.name} in pull request {pull_number}",
            pull_number=pull_number,
            artifact_id=artifact.id,
            body=body,
        )

    def _fail(self, run_logger, error: Exception, pull_number: Optional[int]) -> PublishOutcome:
        message = f"Action failed with error {error}"
        log_error_with_context(run_logger, message, error, pull_number=pull_number)
        self.reporter.set_failed(message)
        return PublishOutcome(status=PublishStatus.FAILED, message=message, pull_number=pull_number)
