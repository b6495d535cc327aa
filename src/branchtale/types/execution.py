"""Types recording what the executor did, or would have done."""

from dataclasses import dataclass, field
from typing import List, Optional

from branchtale.types.vcs import MergeResponse, PullRequestResponse


# Action names, in the only order they can run
CREATE_BRANCH = "create_branch"
CHECKOUT_BRANCH = "checkout_branch"
PUSH_BRANCH = "push_branch"
CREATE_PULL_REQUEST = "create_pull_request"
MERGE_PULL_REQUEST = "merge_pull_request"


@dataclass(frozen=True)
class ActionRecord:
    """A single side effect triggered by the plan."""

    name: str
    detail: str
    performed: bool  # False in dry-run mode


@dataclass
class ExecutionReport:
    """Outcome of executing (or simulating) a Requirements plan."""

    dry_run: bool
    actions: List[ActionRecord] = field(default_factory=list)
    owner: Optional[str] = None
    repo: Optional[str] = None
    pull_request: Optional[PullRequestResponse] = None
    merge: Optional[MergeResponse] = None

    def record(self, name: str, detail: str) -> None:
        self.actions.append(ActionRecord(name=name, detail=detail, performed=not self.dry_run))

    def decisions(self) -> List[str]:
        """Ordered names of the actions the plan triggered."""
        return [action.name for action in self.actions]
