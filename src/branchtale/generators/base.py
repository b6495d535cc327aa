"""Content generator capability shared by the manual and AI variants."""

from typing import Protocol


class ContentGenerator(Protocol):
    """Produces the branch name, pull request title and description for a diff.

    Implementations raise ContentGenerationError on failure. An empty string is
    a successful but empty result and is handled by the caller.
    """

    def generate_branch_name(self, diff: str) -> str: ...

    def generate_pr_title(self, diff: str) -> str: ...

    def generate_pr_description(self, diff: str) -> str: ...
