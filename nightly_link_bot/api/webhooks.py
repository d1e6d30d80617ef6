"""
Webhook endpoints for GitHub ``workflow_run`` events.
"""

import hashlib
import hmac
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Header, HTTPException, Request
from pydantic import ValidationError

from nightly_link_bot.config import settings
from nightly_link_bot.models.outcome import WebhookResponse
from nightly_link_bot.models.repository import RenderContext, RepositoryRef
from nightly_link_bot.models.workflow_run import WorkflowRunEvent
from nightly_link_bot.services.artifact_link_publisher import ArtifactLinkPublisher
from nightly_link_bot.services.github_client import GitHubClient
from nightly_link_bot.utils.actions import LoggingReporter
from nightly_link_bot.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


def verify_webhook_signature(payload: bytes, signature: Optional[str], secret: str) -> bool:
    """
    Verify a GitHub webhook signature.

    Args:
        payload: Raw request payload
        signature: ``X-Hub-Signature-256`` header, ``sha256=<hex digest>``
        secret: Webhook secret shared with GitHub

    Returns:
        True if signature is valid, False otherwise
    """
    if not signature or not signature.startswith("sha256="):
        return False

    expected_signature = "sha256=" + hmac.new(
        secret.encode(),
        payload,
        hashlib.sha256
    ).hexdigest()

    return hmac.compare_digest(signature, expected_signature)


async def process_workflow_run_async(event: WorkflowRunEvent, repository: RepositoryRef) -> None:
    """
    Publish the artifact link for a completed run.

    Args:
        event: Parsed ``workflow_run`` event
        repository: Repository the event came from
    """
    run = event.workflow_run
    reporter = LoggingReporter(run_id=run.id)
    context = RenderContext(
        workflow_name=run.name or "workflow",
        run_url=run.html_url or f"{settings.github_server_url.rstrip('/')}/{repository.full_name}/actions/runs/{run.id}",
    )

    try:
        async with GitHubClient(
            token=settings.github_token,
            api_url=settings.github_api_url,
            api_version=settings.github_api_version,
            timeout=settings.request_timeout_seconds,
        ) as client:
            publisher = ArtifactLinkPublisher(
                client,
                repository,
                reporter,
                purpose=settings.comment_purpose,
                nightly_link_url=settings.nightly_link_url,
            )
            await publisher.publish(run, context)
    except Exception as e:
        logger.error(f"Error processing workflow run {run.id}: {e}", exc_info=True)


@router.post("/github/workflow-run", response_model=WebhookResponse)
async def handle_workflow_run_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_hub_signature_256: Optional[str] = Header(None, alias="X-Hub-Signature-256"),
    x_github_event: Optional[str] = Header(None, alias="X-GitHub-Event"),
) -> WebhookResponse:
    """
    Receive GitHub ``workflow_run`` webhooks.

    This endpoint:
    1. Validates the webhook signature when a secret is configured
    2. Ignores other events and runs that are not completed
    3. Returns 200 immediately and publishes in the background

    Raises:
        HTTPException: If the signature is invalid, the payload is malformed
            or no GitHub token is configured
    """
    payload = await request.body()

    if settings.webhook_secret and not verify_webhook_signature(
        payload, x_hub_signature_256, settings.webhook_secret
    ):
        logger.warning("Invalid webhook signature received")
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    if x_github_event != "workflow_run":
        logger.info(f"Ignoring event type: {x_github_event}")
        return WebhookResponse(
            status="ignored",
            message=f"Event type {x_github_event} not processed"
        )

    try:
        payload_json: Dict[str, Any] = await request.json()
        event = WorkflowRunEvent.model_validate(payload_json)
        if event.repository is None:
            raise ValueError("payload has no repository")
        repository = RepositoryRef.from_full_name(event.repository.full_name)
    except (ValueError, ValidationError) as e:
        logger.error(f"Invalid workflow_run payload: {e}")
        raise HTTPException(status_code=400, detail="Invalid workflow_run payload")

    if event.action != "completed":
        logger.info(f"Ignoring workflow_run action: {event.action}")
        return WebhookResponse(
            status="ignored",
            message=f"Action {event.action} not processed"
        )

    if not settings.github_token:
        logger.error("GITHUB_TOKEN is not configured, cannot publish")
        raise HTTPException(status_code=500, detail="GitHub token not configured")

    run_id = event.workflow_run.id
    logger.info(
        f"Received completed workflow run {run_id} for {repository.full_name}",
        extra={"run_id": run_id, "repository": repository.full_name},
    )

    background_tasks.add_task(process_workflow_run_async, event, repository)

    return WebhookResponse(
        status="accepted",
        message=f"Workflow run {run_id} accepted for processing"
    )
