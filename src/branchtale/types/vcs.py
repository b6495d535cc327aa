"""Value objects exchanged with the pull-request provider."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequestRequest:
    owner: str
    repo: str
    title: str
    description: str
    head: str
    base: str


@dataclass(frozen=True)
class PullRequestResponse:
    url: str
    number: int


@dataclass(frozen=True)
class MergeRequest:
    owner: str
    repo: str
    number: int
    merge_method: str = "merge"  # 'merge', 'squash' or 'rebase'


@dataclass(frozen=True)
class MergeResponse:
    sha: str
    merged: bool
    message: str
