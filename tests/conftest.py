"""
Shared test fixtures: an in-memory GitHub REST API served through
``httpx.MockTransport``.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from nightly_link_bot.models.repository import RenderContext, RepositoryRef
from nightly_link_bot.services.github_client import GitHubClient

OWNER = "octo"
REPO = "template"


def pull_json(number: int, sha: str, body: Optional[str] = None, ref: str = "feature") -> Dict[str, Any]:
    """Pull request payload as the REST API returns it (trimmed)."""
    return {
        "number": number,
        "body": body,
        "state": "open",
        "head": {"sha": sha, "ref": ref},
        "html_url": f"https://github.com/{OWNER}/{REPO}/pull/{number}",
    }


def run_event(run_id: int = 1001, sha: str = "deadbeef", branch: str = "feature",
              head_repo: Optional[str] = REPO, action: str = "completed") -> Dict[str, Any]:
    """``workflow_run`` event payload (trimmed)."""
    return {
        "action": action,
        "workflow_run": {
            "id": run_id,
            "name": "Build Template",
            "head_branch": branch,
            "head_sha": sha,
            "head_repository": {"name": head_repo, "full_name": f"{OWNER}/{head_repo}"} if head_repo else None,
            "html_url": f"https://github.com/{OWNER}/{REPO}/actions/runs/{run_id}",
            "conclusion": "success",
        },
        "repository": {"full_name": f"{OWNER}/{REPO}"},
    }


class FakeGitHub:
    """Serves pull request listings, run artifacts and pull request updates."""

    def __init__(self):
        self.pull_pages: List[List[Dict[str, Any]]] = []
        self.artifacts: List[Dict[str, Any]] = []
        self.requests: List[httpx.Request] = []
        self.updates: List[Dict[str, Any]] = []
        self.errors: Dict[str, int] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.errors:
            return httpx.Response(self.errors[path], json={"message": "Bad credentials"})

        if request.method == "GET" and path == f"/repos/{OWNER}/{REPO}/pulls":
            page = int(request.url.params.get("page", "1"))
            data = self.pull_pages[page - 1] if page <= len(self.pull_pages) else []
            headers = {}
            if page < len(self.pull_pages):
                next_url = request.url.copy_set_param("page", str(page + 1))
                headers["Link"] = f'<{next_url}>; rel="next"'
            return httpx.Response(200, json=data, headers=headers)

        if request.method == "GET" and path.startswith(f"/repos/{OWNER}/{REPO}/actions/runs/"):
            return httpx.Response(
                200,
                json={"total_count": len(self.artifacts), "artifacts": self.artifacts},
            )

        if request.method == "PATCH" and path.startswith(f"/repos/{OWNER}/{REPO}/pulls/"):
            number = int(path.rsplit("/", 1)[-1])
            payload = json.loads(request.content)
            self.updates.append({"number": number, "body": payload["body"], "headers": request.headers})
            return httpx.Response(200, json=pull_json(number, "unused", body=payload["body"]))

        return httpx.Response(404, json={"message": "Not Found"})

    def requests_to(self, method: str, path_prefix: str) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.startswith(path_prefix)
        ]

    def client(self) -> GitHubClient:
        return GitHubClient(token="test-token", transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_github():
    """In-memory GitHub API."""
    return FakeGitHub()


@pytest.fixture
def repository():
    return RepositoryRef(owner=OWNER, repo=REPO)


@pytest.fixture
def render_context():
    return RenderContext(
        workflow_name="PR Comment",
        run_url=f"https://github.com/{OWNER}/{REPO}/actions/runs/2002",
    )


@pytest.fixture
def make_pull():
    """Factory for pull request payloads."""
    return pull_json


@pytest.fixture
def make_event():
    """Factory for ``workflow_run`` event payloads."""
    return run_event
