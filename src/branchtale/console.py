"""Console reporting and interactive prompting."""

from typing import Optional, Protocol, TextIO

from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from branchtale.errors import InputClosedError, WorkflowAborted


class Reporter(Protocol):
    """Narrow interface the workflow uses to talk to the user."""

    def success(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleReporter:
    """Reporter rendering colored messages with rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def success(self, message: str) -> None:
        self.console.print(f"[bold green]✓[/bold green] {escape(message)}")

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]✗ {escape(message)}[/bold red]")


class Prompter:
    """Reads answers from the user; stream replaces stdin when given.

    A closed input stream or Ctrl-C never escapes as a raw exception: a
    yes/no question counts as declined, a free-text question raises
    InputClosedError or WorkflowAborted.
    """

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or Console()
        self.stream = stream

    def yes_no(self, prompt: str) -> bool:
        try:
            return Confirm.ask(
                f"[cyan]{escape(prompt)}[/cyan]", console=self.console, default=False, stream=self.stream
            )
        except (EOFError, KeyboardInterrupt):
            logger.warning(f"No answer to '{prompt}', treating it as no")
            self.console.print()
            return False

    def input(self, prompt: str) -> str:
        try:
            answer = Prompt.ask(
                f"[cyan]{escape(prompt)}[/cyan]", console=self.console, default="", show_default=False, stream=self.stream
            )
        except EOFError as e:
            raise InputClosedError(prompt) from e
        except KeyboardInterrupt as e:
            self.console.print()
            raise WorkflowAborted("Interrupted by user; no changes were made") from e
        return answer.strip()
