"""Interactive content generator: the user types every value."""

from branchtale.console import Prompter


class ManualContentGenerator:
    def __init__(self, prompter: Prompter):
        self.prompter = prompter

    def generate_branch_name(self, diff: str) -> str:
        return self.prompter.input("Enter branch name")

    def generate_pr_title(self, diff: str) -> str:
        return self.prompter.input("Enter pull request title")

    def generate_pr_description(self, diff: str) -> str:
        return self.prompter.input("Enter pull request description")
