#!/usr/bin/env python3
"""
examples/plan_demo.py

Runs the discovery step on a repository and prints the plan branchtale would
execute, using placeholder content instead of a generator. Nothing in the
repository or on GitHub is changed.
"""

import argparse
import os
import sys

from branchtale.console import ConsoleReporter
from branchtale.errors import BranchtaleError
from branchtale.nodes.discovery_node import DiscoveryNode
from branchtale.nodes.planning_node import plan_requirements
from branchtale.repo.inspector import RepositoryInspector
from branchtale.types.plan import GeneratedContent


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Preview the branchtale plan for a repository")
    parser.add_argument(
        "--repo-path",
        type=str,
        default=os.getcwd(),
        help="Path to Git repository (default: current directory)",
    )
    parser.add_argument("--prefix", type=str, default="", help="Branch name prefix")
    parser.add_argument("--branch-name", type=str, default="demo-branch", help="Placeholder branch name")
    parser.add_argument("--title", type=str, default="Demo pull request", help="Placeholder pull request title")
    return parser.parse_args()


def format_commit_info(commit) -> str:
    return f"{commit.short_hash}  {commit.date.strftime('%Y-%m-%d %H:%M')}  {commit.author}  {commit.summary}"


def main():
    """Run discovery and planning without executing anything."""
    args = parse_args()
    reporter = ConsoleReporter()

    try:
        node = DiscoveryNode(RepositoryInspector(args.repo_path), reporter)
        state = node.run({})

        content = GeneratedContent(branch_name=args.branch_name, title=args.title)
        requirements = plan_requirements(
            state["repo_info"],
            state["diff_info"],
            content,
            branch_on_remote=state["branch_on_remote"],
            branch_prefix=args.prefix,
        )
    except BranchtaleError as e:
        print(f"Error building plan: {e}", file=sys.stderr)
        return 1

    print("\nCommits:")
    for commit in state["diff_info"].commits:
        print(f"  {format_commit_info(commit)}")

    print("\nPlan:")
    print(requirements.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
