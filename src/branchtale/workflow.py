"""Branchtale workflow integration using LangGraph for orchestration."""

import argparse
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from langgraph.graph import END, StateGraph
from loguru import logger
from rich.console import Console

from branchtale.config import CONTENT_GENERATION_MODES, MERGE_METHODS, Config, load_config
from branchtale.console import ConsoleReporter, Prompter, Reporter
from branchtale.errors import BranchtaleError, WorkflowAborted
from branchtale.generators.base import ContentGenerator
from branchtale.generators.groq import GroqContentGenerator
from branchtale.generators.manual import ManualContentGenerator
from branchtale.nodes.content_node import ContentNode
from branchtale.nodes.discovery_node import DiscoveryNode, has_changes
from branchtale.nodes.execution_node import ActionExecutor, ExecutionNode
from branchtale.nodes.planning_node import planning_node
from branchtale.repo.inspector import RepositoryInspector
from branchtale.types.state import AgentState
from branchtale.vcs.base import PullRequestProvider
from branchtale.vcs.github import GitHubProvider


@dataclass
class Services:
    """Collaborators wired once per run."""

    inspector: RepositoryInspector
    generator: ContentGenerator
    provider: PullRequestProvider
    reporter: Reporter
    prompter: Prompter


def build_services(config: Config, console: Optional[Console] = None) -> Services:
    """Open the repository and pick the content generator for this run."""
    console = console or Console()
    reporter = ConsoleReporter(console)
    prompter = Prompter(console)
    inspector = RepositoryInspector(config.repo_path, ssh_key_path=config.ssh_key_path)

    if config.use_ai:
        generator = GroqContentGenerator(config.groq_api_key, model=config.model)
    else:
        generator = ManualContentGenerator(prompter)

    provider = GitHubProvider(config.github_token, base_url=config.github_api_url)
    return Services(inspector=inspector, generator=generator, provider=provider, reporter=reporter, prompter=prompter)


def create_workflow(services: Services, config: Config):
    """Create the branchtale workflow graph."""
    executor = ActionExecutor(
        services.inspector,
        services.provider,
        services.reporter,
        dry_run=config.dry_run,
        merge_method=config.merge_method,
    )
    discovery = DiscoveryNode(services.inspector, services.reporter)
    content = ContentNode(services.generator, services.prompter, services.reporter, interactive=config.interactive)
    execution = ExecutionNode(executor, services.reporter, services.prompter if config.interactive else None)

    workflow = StateGraph(AgentState)

    # Add nodes
    workflow.add_node("discovery_node", discovery.run)
    workflow.add_node("content_node", content.run)
    workflow.add_node("planning_node", planning_node)
    workflow.add_node("execution_node", execution.run)

    workflow.set_entry_point("discovery_node")

    # Define edges
    workflow.add_conditional_edges("discovery_node", has_changes, {"changes": "content_node", "up_to_date": END})
    workflow.add_edge("content_node", "planning_node")
    workflow.add_edge("planning_node", "execution_node")
    workflow.add_edge("execution_node", END)

    return workflow.compile()


def run_workflow(config: Config, services: Services) -> AgentState:
    """Run the workflow once and return the final state.

    Any node failure propagates; nothing after the failing node runs.
    """
    initial_state: AgentState = {
        "branch_prefix": config.branch_prefix,
        "merge": config.merge,
        "tags": list(config.tags),
    }
    app = create_workflow(services, config)
    return app.invoke(initial_state)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="branchtale",
        description="Create GitHub pull requests with AI-generated titles and descriptions based on your code changes",
    )
    parser.add_argument("--repo-path", type=str, help="Path inside the Git repository", default=".")
    parser.add_argument("-p", "--prefix", type=str, help="Branch name prefix (e.g. 'feature/xyz-123-')", default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "-c",
        "--content-generation",
        type=str,
        choices=CONTENT_GENERATION_MODES,
        help="Content generation mode",
        default=None,
    )
    parser.add_argument("--model", type=str, help="LLM model to use for 'groq' generation", default=None)
    parser.add_argument("--dry-run", action="store_true", help="Show what would happen without changing anything")
    parser.add_argument("--merge", action="store_true", help="Merge the pull request after creating it")
    parser.add_argument("--merge-method", type=str, choices=MERGE_METHODS, default=None, help="Merge method")
    parser.add_argument("--tag", dest="tags", action="append", default=None, help="Pull request tag (repeatable)")
    parser.add_argument("--non-interactive", action="store_true", help="Never prompt; fail instead")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    load_dotenv()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    console = Console()
    reporter = ConsoleReporter(console)

    try:
        config = load_config(
            repo_path=args.repo_path,
            branch_prefix=args.prefix,
            content_generation=args.content_generation,
            model=args.model,
            verbose=args.verbose,
            dry_run=args.dry_run,
            interactive=not args.non_interactive,
            merge=args.merge,
            merge_method=args.merge_method,
            tags=args.tags,
        )
        if config.verbose:
            reporter.success("Configuration loaded successfully")

        services = build_services(config, console)
    except BranchtaleError as e:
        reporter.error(str(e))
        sys.exit(1)

    try:
        final_state = run_workflow(config, services)
    except WorkflowAborted as e:
        reporter.warning(str(e))
        return
    except BranchtaleError as e:
        reporter.error(str(e))
        sys.exit(1)
    finally:
        if isinstance(services.provider, GitHubProvider):
            services.provider.close()

    requirements = final_state.get("requirements")
    if requirements is not None and requirements.create_branch and not config.dry_run:
        reporter.info("Run branchtale again on the new branch to push it and open a pull request.")
    if config.dry_run:
        reporter.info("Dry run: no changes were made.")


if __name__ == "__main__":
    main()
