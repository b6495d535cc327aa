"""Content node: produces the text the current phase needs from the diff."""

from typing import Callable

from loguru import logger

from branchtale.console import Prompter, Reporter
from branchtale.errors import ContentGenerationError, InputClosedError
from branchtale.generators.base import ContentGenerator
from branchtale.types.plan import GeneratedContent
from branchtale.types.state import AgentState


class ContentNode:
    """Runs the configured generator, falling back to manual input when interactive.

    On trunk only a branch name is generated; the title and description are
    produced once the feature branch exists.
    """

    def __init__(self, generator: ContentGenerator, prompter: Prompter, reporter: Reporter, interactive: bool = True):
        self.generator = generator
        self.prompter = prompter
        self.reporter = reporter
        self.interactive = interactive

    def run(self, state: AgentState) -> AgentState:
        logger.info("Executing Content Node")
        repo_info = state["repo_info"]
        diff = state["diff_info"].diff

        if repo_info.is_on_main:
            branch_name = self._resolve("branch name", self.generator.generate_branch_name, diff, "Enter branch name")
            content = GeneratedContent(branch_name=branch_name)
        else:
            title = self._resolve("pull request title", self.generator.generate_pr_title, diff, "Enter pull request title")
            description = self._resolve(
                "pull request description",
                self.generator.generate_pr_description,
                diff,
                "Enter pull request description",
            )
            content = GeneratedContent(branch_name=repo_info.current_branch, title=title, description=description)

        return {**state, "content": content}

    def _resolve(self, what: str, generate: Callable[[str], str], diff: str, prompt: str) -> str:
        try:
            value = generate(diff).strip()
        except InputClosedError:
            raise
        except ContentGenerationError as e:
            if not self.interactive:
                raise
            self.reporter.warning(f"Failed to generate {what}: {e}")
            return self.prompter.input(prompt)

        if not value:
            if self.interactive:
                logger.warning(f"Generator returned an empty {what}, asking the user")
                return self.prompter.input(prompt)
            logger.warning(f"Generator returned an empty {what}")
            return value

        self.reporter.info(f"Generated {what}: {value}")
        return value
