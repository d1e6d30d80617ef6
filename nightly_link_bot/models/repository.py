"""Repository and run context models."""

from pydantic import BaseModel, ConfigDict


class RepositoryRef(BaseModel):
    """Owner and name of the repository the bot writes to."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str

    @classmethod
    def from_full_name(cls, full_name: str) -> "RepositoryRef":
        """Parse ``owner/repo``."""
        owner, sep, repo = full_name.strip().partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ValueError(f"Invalid repository name: {full_name!r}, expected 'owner/repo'")
        return cls(owner=owner, repo=repo)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class RenderContext(BaseModel):
    """The run that publishes the message, shown in the message callout."""

    workflow_name: str
    run_url: str
