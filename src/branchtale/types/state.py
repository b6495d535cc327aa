"""State management types for the branchtale workflow."""

from typing import List, Optional, TypedDict

from branchtale.types.execution import ExecutionReport
from branchtale.types.plan import GeneratedContent, Requirements
from branchtale.types.repo import DiffInfo, RepoInfo


class AgentState(TypedDict, total=False):
    """State container passed between workflow nodes.

    Using TypedDict for LangGraph compatibility. total=False means all fields
    are optional; each node adds its own output.
    """

    # Run options
    branch_prefix: str  # Prepended to generated branch names
    merge: bool  # Merge the pull request after opening it
    tags: List[str]  # Carried into the plan as pull request tags

    # Discovery node output
    repo_info: RepoInfo
    diff_info: DiffInfo
    branch_on_remote: Optional[bool]  # None while on trunk

    # Content node output
    content: GeneratedContent

    # Planning node output
    requirements: Requirements

    # Execution node output
    report: ExecutionReport
