"""
Renders the pull request section that links a build artifact.
"""

from nightly_link_bot.models.artifact import Artifact
from nightly_link_bot.models.repository import RenderContext, RepositoryRef

DEFAULT_NIGHTLY_LINK_URL = "https://nightly.link"


def artifact_download_url(
    repository: RepositoryRef,
    artifact: Artifact,
    nightly_link_url: str = DEFAULT_NIGHTLY_LINK_URL,
) -> str:
    """Public nightly.link URL for an artifact zip (no GitHub login needed)."""
    base = nightly_link_url.rstrip("/")
    return f"{base}/{repository.owner}/{repository.repo}/actions/artifacts/{artifact.id}.zip"


def render_artifact_message(
    repository: RepositoryRef,
    artifact: Artifact,
    head_sha: str,
    context: RenderContext,
    nightly_link_url: str = DEFAULT_NIGHTLY_LINK_URL,
) -> str:
    """
    Render the Markdown section for a built template.

    The first line embeds ``head_sha`` so later runs can tell the section is
    current.

    Args:
        repository: Repository the artifact belongs to
        artifact: Artifact to link
        head_sha: Commit the artifact was built from
        context: Workflow run that publishes the section
        nightly_link_url: nightly.link instance

    Returns:
        Markdown text
    """
    url = artifact_download_url(repository, artifact, nightly_link_url)
    name = artifact.name

    parts = [
        f"<!-- commit-sha: {head_sha} -->",
        "## Download the template for this pull request: ",
        "",
        "> [!NOTE]  ",
        f"> This is auto generated from [`{context.workflow_name}`]({context.run_url})",
        f"- via manual download: [{name}.zip]({url})",
        "- via PROS Integrated Terminal: ",
        "  ```",
        f"  curl -o {name}.zip {url};",
        f"  pros c fetch {name}.zip;",
        f"  pros c apply {name};",
        f"  rm {name}.zip;",
        "  ```",
    ]

    return "\n".join(parts)
