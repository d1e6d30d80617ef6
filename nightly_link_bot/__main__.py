"""
GitHub Actions entry point.

Run as a step of a workflow triggered by ``workflow_run`` (completed):

    python -m nightly_link_bot

The event payload is read from ``GITHUB_EVENT_PATH``; failures are reported
with an ``::error::`` workflow command and a non-zero exit code.
"""

import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from nightly_link_bot.config import Settings, settings
from nightly_link_bot.models.repository import RenderContext, RepositoryRef
from nightly_link_bot.models.workflow_run import WorkflowRunEvent
from nightly_link_bot.services.artifact_link_publisher import ArtifactLinkPublisher
from nightly_link_bot.services.github_client import GitHubClient
from nightly_link_bot.utils.actions import ActionsReporter
from nightly_link_bot.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def load_event(path: str) -> WorkflowRunEvent:
    """Read and validate a ``workflow_run`` event payload."""
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    return WorkflowRunEvent.model_validate(payload)


def build_render_context(config: Settings, repository: RepositoryRef) -> RenderContext:
    """Describe the running workflow; Actions exports its name and run id."""
    server_url = config.github_server_url.rstrip("/")
    return RenderContext(
        workflow_name=config.github_workflow or "workflow",
        run_url=f"{server_url}/{repository.owner}/{repository.repo}/actions/runs/{config.github_run_id}",
    )


async def run(config: Settings, event_path: str, reporter: ActionsReporter) -> None:
    """Publish the artifact link for the event at ``event_path``."""
    try:
        event = load_event(event_path)
    except (OSError, ValueError, ValidationError) as e:
        reporter.set_failed(f"Action failed with error {e}")
        return

    repository_name = config.github_repository or (event.repository.full_name if event.repository else None)
    if not repository_name:
        reporter.set_failed("Action failed with error GITHUB_REPOSITORY is not set")
        return
    if not config.github_token:
        reporter.set_failed("Action failed with error GITHUB_TOKEN is not set")
        return

    try:
        repository = RepositoryRef.from_full_name(repository_name)
    except ValueError as e:
        reporter.set_failed(f"Action failed with error {e}")
        return
    context = build_render_context(config, repository)

    async with GitHubClient(
        token=config.github_token,
        api_url=config.github_api_url,
        api_version=config.github_api_version,
        timeout=config.request_timeout_seconds,
    ) as client:
        publisher = ArtifactLinkPublisher(
            client,
            repository,
            reporter,
            purpose=config.comment_purpose,
            nightly_link_url=config.nightly_link_url,
        )
        outcome = await publisher.publish(event.workflow_run, context)

    logger.info(f"Finished with status {outcome.status.value}", extra={"run_id": event.workflow_run.id})


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    parser = argparse.ArgumentParser(
        prog="nightly-link-bot",
        description="Link a workflow run's artifact from its pull request description.",
    )
    parser.add_argument(
        "--event-path",
        default=settings.github_event_path,
        help="workflow_run event payload (default: $GITHUB_EVENT_PATH)",
    )
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)
    reporter = ActionsReporter()

    if not args.event_path:
        reporter.set_failed("Action failed with error no event payload, set GITHUB_EVENT_PATH")
        return reporter.exit_code

    asyncio.run(run(settings, args.event_path, reporter))
    return reporter.exit_code


if __name__ == "__main__":
    sys.exit(main())
