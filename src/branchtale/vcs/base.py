"""Pull-request provider capability."""

from typing import Protocol

from branchtale.types.vcs import MergeRequest, MergeResponse, PullRequestRequest, PullRequestResponse


class PullRequestProvider(Protocol):
    def create_pull_request(self, request: PullRequestRequest) -> PullRequestResponse: ...

    def merge_pull_request(self, request: MergeRequest) -> MergeResponse: ...
