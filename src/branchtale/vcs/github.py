"""
GitHub pull-request provider

Opens and merges pull requests through the GitHub REST API, and maps a git
remote URL onto the owner/repo pair the API needs.
"""

import re
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

import httpx
from loguru import logger

from branchtale.errors import (
    MalformedRemotePathError,
    ProviderAuthError,
    ProviderError,
    UnsupportedHostError,
    UnsupportedRemoteURLError,
)
from branchtale.types.vcs import MergeRequest, MergeResponse, PullRequestRequest, PullRequestResponse

GITHUB_HOST = "github.com"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_MERGE_METHOD = "merge"

SSH_URL_PATTERN = re.compile(r"^git@github\.com:(?P<path>.+)$")

# Merge attempts answered with these codes are outcomes, not failures
NOT_MERGEABLE_STATUS_CODES = (405, 409)


def parse_remote_url(remote_url: str) -> Tuple[str, str]:
    """Extract (owner, repo) from a GitHub SSH or HTTPS remote URL.

    Supports ``git@github.com:<owner>/<repo>.git`` and
    ``https://github.com/<owner>/<repo>[.git]``.
    """
    match = SSH_URL_PATTERN.match(remote_url.strip())
    if match:
        path = match.group("path")
    else:
        parsed = urlparse(remote_url.strip())
        if parsed.scheme != "https":
            raise UnsupportedRemoteURLError(remote_url, "only git@github.com: and https:// remotes are supported")
        if parsed.hostname != GITHUB_HOST:
            raise UnsupportedHostError(remote_url)
        path = parsed.path

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    parts = path.split("/")
    if len(parts) != 2 or not all(parts):
        raise MalformedRemotePathError(remote_url)
    return parts[0], parts[1]


class GitHubProvider:
    """GitHub REST API client for pull request operations."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.client = httpx.Client(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=timeout,
            transport=transport,
        )

    def create_pull_request(self, request: PullRequestRequest) -> PullRequestResponse:
        """Open a pull request from request.head into request.base."""
        path = f"/repos/{request.owner}/{request.repo}/pulls"
        payload = {
            "title": request.title,
            "head": request.head,
            "base": request.base,
            "body": request.description,
        }
        logger.debug(f"Creating pull request {request.head} -> {request.base} on {request.owner}/{request.repo}")
        response = self._send("POST", path, payload)
        if response.status_code != 201:
            raise self._error(response, "Failed to create pull request")

        data = response.json()
        return PullRequestResponse(url=data.get("html_url", ""), number=int(data["number"]))

    def merge_pull_request(self, request: MergeRequest) -> MergeResponse:
        """Merge a pull request.

        A pull request GitHub refuses to merge (branch protection, conflicts,
        head moved) yields ``merged=False`` with GitHub's explanation.
        """
        path = f"/repos/{request.owner}/{request.repo}/pulls/{request.number}/merge"
        payload = {"merge_method": request.merge_method or DEFAULT_MERGE_METHOD}
        logger.debug(f"Merging pull request #{request.number} on {request.owner}/{request.repo}")
        response = self._send("PUT", path, payload)

        if response.status_code in NOT_MERGEABLE_STATUS_CODES:
            message = self._message(response)
            logger.warning(f"Pull request #{request.number} not merged: {message}")
            return MergeResponse(sha="", merged=False, message=message)
        if response.status_code != 200:
            raise self._error(response, f"Failed to merge pull request #{request.number}")

        data = response.json()
        return MergeResponse(
            sha=data.get("sha") or "",
            merged=bool(data.get("merged")),
            message=data.get("message") or "",
        )

    def close(self) -> None:
        self.client.close()

    def _send(self, method: str, path: str, payload: Dict[str, Any]) -> httpx.Response:
        try:
            return self.client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            raise ProviderError(f"GitHub request {method} {path} failed: {e}") from e

    @staticmethod
    def _message(response: httpx.Response) -> str:
        try:
            return response.json().get("message", response.text)
        except ValueError:
            return response.text

    def _error(self, response: httpx.Response, context: str) -> ProviderError:
        message = f"{context}: {response.status_code} {self._message(response)}"
        if response.status_code in (401, 403):
            return ProviderAuthError(message, status_code=response.status_code)
        return ProviderError(message, status_code=response.status_code)
