"""Picks the artifact to link for a workflow run."""

from nightly_link_bot.models.artifact import Artifact
from nightly_link_bot.models.repository import RepositoryRef
from nightly_link_bot.services.exceptions import NoArtifacts
from nightly_link_bot.services.github_client import GitHubClient
from nightly_link_bot.utils.logging import get_logger

logger = get_logger(__name__)


class ArtifactSelector:
    """Selects the primary artifact of a workflow run."""

    def __init__(self, client: GitHubClient, repository: RepositoryRef):
        self.client = client
        self.repository = repository

    async def select_primary(self, run_id: int) -> Artifact:
        """
        Return the first artifact the run uploaded.

        There is no ranking: workflows that upload several artifacts get the
        first one the API lists.

        Raises:
            NoArtifacts: If the run uploaded nothing
        """
        artifacts = await self.client.list_workflow_run_artifacts(
            self.repository.owner,
            self.repository.repo,
            run_id,
        )
        if not artifacts:
            raise NoArtifacts(run_id)

        artifact = artifacts[0]
        if len(artifacts) > 1:
            logger.info(
                f"Run {run_id} has {len(artifacts)} artifacts, using {artifact.name}",
                extra={"run_id": run_id},
            )
        return artifact
