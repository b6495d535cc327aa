"""
Discovery node: inspects the repository and collects the commits to publish.

On the trunk branch the change set is what the local trunk has on top of
origin's trunk. On a feature branch it is what the branch has on top of
origin's trunk, plus whether the branch already exists on origin.
"""

from loguru import logger

from branchtale.console import Reporter
from branchtale.repo.inspector import RepositoryInspector
from branchtale.types.state import AgentState

REMOTE_NAME = "origin"


class DiscoveryNode:
    """Node responsible for reading repository state."""

    def __init__(self, inspector: RepositoryInspector, reporter: Reporter):
        self.inspector = inspector
        self.reporter = reporter

    def run(self, state: AgentState) -> AgentState:
        logger.info("Executing Discovery Node")
        repo_info = self.inspector.get_info()
        self.reporter.info(f"Current branch: {repo_info.current_branch}")

        if repo_info.is_on_main:
            self.reporter.info("You are on the main branch.")
            branch_on_remote = None
        else:
            self.reporter.info(f"You are on a feature branch: {repo_info.current_branch}")
            branch_on_remote = self.inspector.branch_exists_on_remote(repo_info.current_branch, REMOTE_NAME)
            logger.debug(f"Branch {repo_info.current_branch} on {REMOTE_NAME}: {branch_on_remote}")

        diff_info = self.inspector.diff_between(REMOTE_NAME, repo_info.main_branch, repo_info.current_branch)

        if diff_info.is_empty:
            self.reporter.info(
                f"No local commits found ahead of {REMOTE_NAME}/{repo_info.main_branch}. Your branch is up to date."
            )
        else:
            self.reporter.info(
                f"Found {len(diff_info.commits)} local commit(s) ahead of {REMOTE_NAME}/{repo_info.main_branch}:"
            )
            for i, commit in enumerate(diff_info.commits, start=1):
                self.reporter.info(f"  {i}. {commit.short_hash} - {commit.summary}")

        return {
            **state,
            "repo_info": repo_info,
            "diff_info": diff_info,
            "branch_on_remote": branch_on_remote,
        }


def has_changes(state: AgentState) -> str:
    """Route to content generation only when there is something to publish."""
    diff_info = state.get("diff_info")
    if diff_info is None or diff_info.is_empty:
        return "up_to_date"
    return "changes"
