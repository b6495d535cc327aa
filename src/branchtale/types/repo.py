"""Types describing repository topology and change sets."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from git.objects.commit import Commit


@dataclass(frozen=True)
class CommitInfo:
    """Information about a single commit."""

    hash: str
    message: str
    author: str
    email: str
    date: datetime

    @property
    def short_hash(self) -> str:
        return self.hash[:8]

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]

    @classmethod
    def from_git_commit(cls, commit: Commit) -> "CommitInfo":
        """Create a CommitInfo instance from a GitPython Commit object."""
        return cls(
            hash=commit.hexsha,
            message=commit.message.strip(),
            author=commit.author.name or "",
            email=commit.author.email or "",
            date=datetime.fromtimestamp(commit.authored_date),
        )


@dataclass(frozen=True)
class RepoInfo:
    """Snapshot of the checked-out branch and the detected trunk."""

    current_branch: str
    main_branch: str

    @property
    def is_on_main(self) -> bool:
        return self.current_branch == self.main_branch


@dataclass(frozen=True)
class DiffInfo:
    """Change set between a base ref and a tip ref.

    Commits are ordered newest-first and exclude the base commit. An empty
    commit list always comes with an empty diff.
    """

    diff: str = ""
    commits: List[CommitInfo] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.commits
