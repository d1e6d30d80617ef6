"""Unit tests for the GitHub REST client."""

import json

import httpx
import pytest

from nightly_link_bot.services.exceptions import GitHubAPIError
from nightly_link_bot.services.github_client import GitHubClient


def make_client(handler) -> GitHubClient:
    return GitHubClient(token="test-token", transport=httpx.MockTransport(handler))


def test_token_is_required():
    with pytest.raises(ValueError):
        GitHubClient(token="")


@pytest.mark.asyncio
async def test_default_headers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    async with make_client(handler) as client:
        async for _ in client.paginate("/repos/octo/template/pulls"):
            pass

    headers = seen[0].headers
    assert headers["Authorization"] == "Bearer test-token"
    assert headers["Accept"] == "application/vnd.github+json"
    assert headers["X-GitHub-Api-Version"] == "2022-11-28"
    assert seen[0].url.params["per_page"] == "100"


@pytest.mark.asyncio
async def test_paginate_follows_next_links():
    def handler(request):
        page = int(request.url.params.get("page", "1"))
        headers = {}
        if page < 3:
            headers["Link"] = (
                f'<https://api.github.com/repos/octo/template/pulls?per_page=100&page={page + 1}>; rel="next", '
                f'<https://api.github.com/repos/octo/template/pulls?per_page=100&page=3>; rel="last"'
            )
        return httpx.Response(200, json=[{"page": page}], headers=headers)

    async with make_client(handler) as client:
        pages = [page async for page in client.paginate("/repos/octo/template/pulls")]

    assert pages == [[{"page": 1}], [{"page": 2}], [{"page": 3}]]


@pytest.mark.asyncio
async def test_paginate_unwraps_item_key():
    def handler(request):
        return httpx.Response(200, json={"total_count": 1, "artifacts": [{"id": 1, "name": "a"}]})

    async with make_client(handler) as client:
        artifacts = await client.list_workflow_run_artifacts("octo", "template", 5)

    assert [a.id for a in artifacts] == [1]


@pytest.mark.asyncio
async def test_error_response_raises():
    def handler(request):
        return httpx.Response(401, json={"message": "Bad credentials"})

    async with make_client(handler) as client:
        with pytest.raises(GitHubAPIError) as exc_info:
            await client.list_workflow_run_artifacts("octo", "template", 5)

    assert exc_info.value.status_code == 401
    assert "Bad credentials" in str(exc_info.value)


@pytest.mark.asyncio
async def test_update_pull_request_patches_body():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={"number": 42, "body": json.loads(request.content)["body"], "head": {"sha": "abc"}},
        )

    async with make_client(handler) as client:
        pull = await client.update_pull_request("octo", "template", 42, "new body")

    assert seen[0].method == "PATCH"
    assert seen[0].url.path == "/repos/octo/template/pulls/42"
    assert json.loads(seen[0].content) == {"body": "new body"}
    assert pull.body == "new body"


@pytest.mark.asyncio
async def test_transport_error_propagates():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(httpx.ConnectError):
            await client.update_pull_request("octo", "template", 42, "body")
