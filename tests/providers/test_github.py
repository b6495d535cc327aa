"""Tests for the GitHub provider and remote URL parsing."""

import json

import httpx
import pytest

from branchtale.errors import (
    MalformedRemotePathError,
    ProviderAuthError,
    ProviderError,
    UnsupportedHostError,
    UnsupportedRemoteURLError,
)
from branchtale.types.vcs import MergeRequest, PullRequestRequest
from branchtale.vcs.github import GitHubProvider, parse_remote_url


@pytest.mark.parametrize(
    "url",
    [
        "git@github.com:acme/widgets.git",
        "https://github.com/acme/widgets",
        "https://github.com/acme/widgets.git",
        "https://github.com/acme/widgets/",
    ],
)
def test_parse_remote_url(url):
    assert parse_remote_url(url) == ("acme", "widgets")


def test_parse_remote_url_unsupported_host():
    with pytest.raises(UnsupportedHostError):
        parse_remote_url("https://gitlab.com/acme/widgets.git")


def test_parse_remote_url_malformed_path():
    with pytest.raises(MalformedRemotePathError):
        parse_remote_url("https://github.com/acme")


def test_parse_remote_url_too_many_segments():
    with pytest.raises(MalformedRemotePathError):
        parse_remote_url("https://github.com/acme/widgets/tree/main")


def test_parse_remote_url_not_a_url():
    with pytest.raises(UnsupportedRemoteURLError):
        parse_remote_url("not-a-url")


@pytest.mark.parametrize(
    "url",
    [
        "http://github.com/acme/widgets",
        "ssh://git@github.com/acme/widgets.git",
        "git://github.com/acme/widgets.git",
    ],
)
def test_parse_remote_url_other_schemes_unsupported(url):
    with pytest.raises(UnsupportedRemoteURLError, match="https"):
        parse_remote_url(url)


@pytest.fixture
def pr_request():
    return PullRequestRequest(
        owner="acme",
        repo="widgets",
        title="Add retry logic",
        description="Retries failed requests.",
        head="fix/timeout",
        base="main",
    )


def make_provider(handler) -> GitHubProvider:
    return GitHubProvider("secret-token", transport=httpx.MockTransport(handler))


def test_create_pull_request(pr_request):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"html_url": "https://github.com/acme/widgets/pull/7", "number": 7})

    response = make_provider(handler).create_pull_request(pr_request)

    assert response.url == "https://github.com/acme/widgets/pull/7"
    assert response.number == 7
    assert captured["method"] == "POST"
    assert captured["path"] == "/repos/acme/widgets/pulls"
    assert captured["auth"] == "Bearer secret-token"
    assert captured["body"] == {
        "title": "Add retry logic",
        "head": "fix/timeout",
        "base": "main",
        "body": "Retries failed requests.",
    }


def test_create_pull_request_validation_failure(pr_request):
    def handler(request):
        return httpx.Response(422, json={"message": "Validation Failed"})

    with pytest.raises(ProviderError) as exc_info:
        make_provider(handler).create_pull_request(pr_request)
    assert exc_info.value.status_code == 422
    assert "Validation Failed" in str(exc_info.value)


def test_create_pull_request_bad_token(pr_request):
    def handler(request):
        return httpx.Response(401, json={"message": "Bad credentials"})

    with pytest.raises(ProviderAuthError):
        make_provider(handler).create_pull_request(pr_request)


def test_create_pull_request_network_failure(pr_request):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError):
        make_provider(handler).create_pull_request(pr_request)


def test_merge_pull_request():
    captured = {}

    def handler(request):
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"sha": "abc123", "merged": True, "message": "Pull Request successfully merged"})

    result = make_provider(handler).merge_pull_request(
        MergeRequest(owner="acme", repo="widgets", number=7, merge_method="squash")
    )

    assert result.merged
    assert result.sha == "abc123"
    assert captured["method"] == "PUT"
    assert captured["path"] == "/repos/acme/widgets/pulls/7/merge"
    assert captured["body"] == {"merge_method": "squash"}


def test_merge_defaults_to_merge_method():
    captured = {}

    def handler(request):
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"sha": "abc123", "merged": True, "message": "merged"})

    make_provider(handler).merge_pull_request(MergeRequest(owner="acme", repo="widgets", number=7, merge_method=""))

    assert captured["body"] == {"merge_method": "merge"}


def test_merge_blocked_is_not_an_error():
    def handler(request):
        return httpx.Response(405, json={"message": "Required status check is expected."})

    result = make_provider(handler).merge_pull_request(MergeRequest(owner="acme", repo="widgets", number=7))

    assert not result.merged
    assert result.sha == ""
    assert result.message == "Required status check is expected."


def test_merge_server_error():
    def handler(request):
        return httpx.Response(500, text="oops")

    with pytest.raises(ProviderError) as exc_info:
        make_provider(handler).merge_pull_request(MergeRequest(owner="acme", repo="widgets", number=7))
    assert exc_info.value.status_code == 500
