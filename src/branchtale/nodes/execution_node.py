"""
Execution node: realizes a Requirements plan as ordered side effects.

The order is fixed because each step relies on the previous one:
create + checkout branch, push, resolve owner/repo from origin, open the pull
request, merge it. Dry runs walk the same decisions and skip only the
mutating calls, so their report is a faithful preview of a live run.
"""

from typing import Optional

from loguru import logger

from branchtale.console import Prompter, Reporter
from branchtale.errors import EmptyBranchNameError, EmptyTitleError, UnresolvedBaseBranchError, WorkflowAborted
from branchtale.repo.inspector import RepositoryInspector
from branchtale.types.execution import (
    CHECKOUT_BRANCH,
    CREATE_BRANCH,
    CREATE_PULL_REQUEST,
    MERGE_PULL_REQUEST,
    PUSH_BRANCH,
    ExecutionReport,
)
from branchtale.types.plan import Requirements
from branchtale.types.state import AgentState
from branchtale.types.vcs import MergeRequest, PullRequestRequest
from branchtale.vcs.base import PullRequestProvider
from branchtale.vcs.github import DEFAULT_MERGE_METHOD, parse_remote_url

REMOTE_NAME = "origin"


def validate_requirements(requirements: Requirements) -> None:
    """Reject inconsistent plans before anything is mutated."""
    needs_branch = requirements.create_branch or requirements.push_branch or requirements.create_pull_request
    if needs_branch and not requirements.branch_name.strip():
        raise EmptyBranchNameError()
    if requirements.create_pull_request:
        if not requirements.base_branch.strip():
            raise UnresolvedBaseBranchError()
        if not requirements.pull_request_title.strip():
            raise EmptyTitleError()


class ActionExecutor:
    """Performs, or in dry-run mode only reports, the actions of a plan."""

    def __init__(
        self,
        inspector: RepositoryInspector,
        provider: PullRequestProvider,
        reporter: Reporter,
        dry_run: bool = False,
        merge_method: str = DEFAULT_MERGE_METHOD,
        remote_name: str = REMOTE_NAME,
    ):
        self.inspector = inspector
        self.provider = provider
        self.reporter = reporter
        self.dry_run = dry_run
        self.merge_method = merge_method
        self.remote_name = remote_name

    def execute(self, requirements: Requirements) -> ExecutionReport:
        validate_requirements(requirements)
        report = ExecutionReport(dry_run=self.dry_run)

        if requirements.create_branch:
            self._create_branch(requirements.branch_name, report)

        if requirements.push_branch:
            self._push_branch(requirements.branch_name, report)

        if not requirements.create_pull_request:
            return report

        # Read-only, so dry runs resolve the target too
        report.owner, report.repo = parse_remote_url(self.inspector.get_remote_url(self.remote_name))
        logger.debug(f"Pull request target: {report.owner}/{report.repo}")

        self._create_pull_request(requirements, report)

        if requirements.merge_pull_request:
            self._merge_pull_request(report)

        return report

    def _create_branch(self, branch_name: str, report: ExecutionReport) -> None:
        report.record(CREATE_BRANCH, branch_name)
        report.record(CHECKOUT_BRANCH, branch_name)
        if self.dry_run:
            self.reporter.info(f"[dry-run] Would create and check out branch '{branch_name}'")
            return
        self.inspector.create_branch(branch_name)
        self.inspector.checkout_branch(branch_name)
        self.reporter.success(f"Branch '{branch_name}' created and checked out successfully")

    def _push_branch(self, branch_name: str, report: ExecutionReport) -> None:
        report.record(PUSH_BRANCH, f"{branch_name} -> {self.remote_name}")
        if self.dry_run:
            self.reporter.info(f"[dry-run] Would push branch '{branch_name}' to {self.remote_name}")
            return
        self.inspector.push_branch(branch_name, self.remote_name)
        self.reporter.success(f"Branch '{branch_name}' pushed to {self.remote_name}")

    def _create_pull_request(self, requirements: Requirements, report: ExecutionReport) -> None:
        request = PullRequestRequest(
            owner=report.owner,
            repo=report.repo,
            title=requirements.pull_request_title,
            description=requirements.pull_request_description,
            head=requirements.branch_name,
            base=requirements.base_branch,
        )
        report.record(CREATE_PULL_REQUEST, f"{request.head} -> {request.base} on {request.owner}/{request.repo}")
        if self.dry_run:
            self.reporter.info(
                f"[dry-run] Would create pull request '{request.title}' "
                f"({request.head} -> {request.base}) on {request.owner}/{request.repo}"
            )
            return
        report.pull_request = self.provider.create_pull_request(request)
        self.reporter.success(f"Pull request #{report.pull_request.number} created: {report.pull_request.url}")

    def _merge_pull_request(self, report: ExecutionReport) -> None:
        if self.dry_run:
            report.record(MERGE_PULL_REQUEST, self.merge_method)
            self.reporter.info(f"[dry-run] Would merge the pull request using '{self.merge_method}'")
            return

        number = report.pull_request.number
        report.record(MERGE_PULL_REQUEST, f"#{number} {self.merge_method}")
        report.merge = self.provider.merge_pull_request(
            MergeRequest(owner=report.owner, repo=report.repo, number=number, merge_method=self.merge_method)
        )
        if report.merge.merged:
            self.reporter.success(f"Pull request #{number} merged: {report.merge.sha}")
        else:
            self.reporter.warning(f"Pull request #{number} was not merged: {report.merge.message}")


class ExecutionNode:
    """Asks for confirmation when interactive, then hands the plan to the executor."""

    def __init__(self, executor: ActionExecutor, reporter: Reporter, prompter: Optional[Prompter] = None):
        self.executor = executor
        self.reporter = reporter
        self.prompter = prompter

    def run(self, state: AgentState) -> AgentState:
        logger.info("Executing Execution Node")
        requirements = state["requirements"]

        if requirements.is_empty():
            self.reporter.info("Nothing to do.")
            return {**state, "report": ExecutionReport(dry_run=self.executor.dry_run)}

        if self.prompter is not None and not self.executor.dry_run:
            if not self.prompter.yes_no(self._describe(requirements)):
                raise WorkflowAborted("Aborted by user; no changes were made")

        report = self.executor.execute(requirements)
        return {**state, "report": report}

    @staticmethod
    def _describe(requirements: Requirements) -> str:
        if requirements.create_branch:
            return f"Create branch '{requirements.branch_name}'?"
        if requirements.push_branch:
            return f"Push '{requirements.branch_name}' and open a pull request into '{requirements.base_branch}'?"
        return f"Open a pull request from '{requirements.branch_name}' into '{requirements.base_branch}'?"
