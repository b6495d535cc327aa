"""Planning node: turns repository state and generated content into Requirements."""

from typing import Optional, Sequence

from loguru import logger

from branchtale.errors import EmptyBranchNameError, EmptyTitleError
from branchtale.types.plan import GeneratedContent, Requirements
from branchtale.types.repo import DiffInfo, RepoInfo
from branchtale.types.state import AgentState


def plan_requirements(
    repo_info: RepoInfo,
    diff_info: DiffInfo,
    content: Optional[GeneratedContent],
    branch_on_remote: Optional[bool] = None,
    branch_prefix: str = "",
    merge: bool = False,
    tags: Sequence[str] = (),
) -> Requirements:
    """Decide which actions must run. Pure: the same inputs give the same plan.

    - trunk, nothing ahead of origin: empty plan
    - trunk, commits ahead: create the (prefixed) generated branch
    - feature branch: push when absent from origin, then open a pull request
      against the trunk (and merge it when asked)
    """
    if diff_info.is_empty:
        return Requirements(base_branch=repo_info.main_branch)

    content = content or GeneratedContent()

    if repo_info.is_on_main:
        if not content.branch_name.strip():
            raise EmptyBranchNameError()
        return Requirements(
            create_branch=True,
            branch_name=f"{branch_prefix}{content.branch_name.strip()}",
            base_branch=repo_info.main_branch,
        )

    if not content.title.strip():
        raise EmptyTitleError()
    return Requirements(
        branch_name=repo_info.current_branch,
        push_branch=not branch_on_remote,
        base_branch=repo_info.main_branch,
        create_pull_request=True,
        pull_request_title=content.title.strip(),
        pull_request_description=content.description.strip(),
        pull_request_tags=list(tags),
        merge_pull_request=merge,
    )


def planning_node(state: AgentState) -> AgentState:
    """Build the plan from discovery and content output plus the run options."""
    logger.info("Executing Planning Node")
    requirements = plan_requirements(
        repo_info=state["repo_info"],
        diff_info=state["diff_info"],
        content=state.get("content"),
        branch_on_remote=state.get("branch_on_remote"),
        branch_prefix=state.get("branch_prefix", ""),
        merge=state.get("merge", False),
        tags=state.get("tags", []),
    )
    logger.debug(f"Plan: {requirements.model_dump_json()}")
    return {**state, "requirements": requirements}
