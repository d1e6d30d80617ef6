"""
GitHub REST client.

Thin async wrapper over ``httpx`` for the handful of endpoints the bot uses:
listing pull requests, listing workflow run artifacts and updating a pull
request body. Listings are paginated lazily through the ``Link`` header.
"""

import time
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from nightly_link_bot.models.artifact import Artifact
from nightly_link_bot.models.pull_request import PullRequest
from nightly_link_bot.services.exceptions import GitHubAPIError
from nightly_link_bot.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"


class GitHubClient:
    """Async GitHub REST API client authenticated with a static token."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        api_version: str = DEFAULT_API_VERSION,
        per_page: int = 100,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Token sent as a bearer credential
            api_url: REST API root (differs on GitHub Enterprise Server)
            api_version: Value of the X-GitHub-Api-Version header
            per_page: Page size requested from list endpoints
            timeout: Request timeout in seconds
            transport: Optional transport, used by tests to stub responses
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.api_version = api_version
        self.per_page = per_page
        self._client = httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": api_version,
                "User-Agent": "nightly-link-bot",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        start_time = time.time()
        try:
            response = await self._client.request(
                method, url, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            log_api_call(
                logger,
                endpoint=url,
                method=method,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )
            raise

        duration_ms = (time.time() - start_time) * 1000

        if response.is_error:
            message = _error_message(response)
            log_api_call(
                logger,
                endpoint=url,
                method=method,
                status_code=response.status_code,
                duration_ms=duration_ms,
                error=message,
            )
            raise GitHubAPIError(response.status_code, message, url=str(response.url))

        log_api_call(
            logger,
            endpoint=url,
            method=method,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response

    async def paginate(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        item_key: Optional[str] = None,
    ) -> AsyncIterator[List[Dict[str, Any]]]:
        """
        Yield the pages of a list endpoint, one request per page.

        The next page is requested only when the consumer asks for it, so a
        caller that stops iterating stops fetching.

        Args:
            path: Endpoint path relative to the API root
            params: Query parameters for the first request
            item_key: Key holding the list when the endpoint wraps it in an
                object (e.g. ``"artifacts"``); ``None`` for bare arrays

        Yields:
            The items of each page
        """
        url: Optional[str] = path
        query: Optional[Dict[str, Any]] = {"per_page": self.per_page, **(params or {})}

        while url is not None:
            response = await self._request("GET", url, params=query)
            data = response.json()
            yield data.get(item_key, []) if item_key else data

            # The next link already carries every query parameter
            url = response.links.get("next", {}).get("url")
            query = None

    async def iter_pull_requests(
        self,
        owner: str,
        repo: str,
        head: str,
        sort: str = "updated",
        direction: str = "desc",
        state: str = "open",
    ) -> AsyncIterator[List[PullRequest]]:
        """Yield pages of pull requests whose head matches ``user:ref``."""
        params = {"head": head, "sort": sort, "direction": direction, "state": state}
        async for page in self.paginate(f"/repos/{owner}/{repo}/pulls", params=params):
            yield [PullRequest.model_validate(item) for item in page]

    async def list_workflow_run_artifacts(
        self,
        owner: str,
        repo: str,
        run_id: int,
    ) -> List[Artifact]:
        """Return every artifact of a workflow run, in API order."""
        artifacts: List[Artifact] = []
        async for page in self.paginate(
            f"/repos/{owner}/{repo}/actions/runs/{run_id}/artifacts",
            item_key="artifacts",
        ):
            artifacts.extend(Artifact.model_validate(item) for item in page)
        return artifacts

    async def update_pull_request(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        body: str,
    ) -> PullRequest:
        """Replace the body of a pull request."""
        response = await self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/pulls/{pull_number}",
            json={"body": body},
            headers={"X-GitHub-Api-Version": self.api_version},
        )
        return PullRequest.model_validate(response.json())


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return payload["message"]
    return response.text
