"""Shared fixtures: throwaway repositories with a bare 'origin' next to them."""

from pathlib import Path

import pytest
from git import Repo

from branchtale.types.vcs import MergeResponse, PullRequestResponse

GITHUB_URL = "https://github.com/acme/widgets.git"


def create_commit(repo: Repo, file_name: str, content: str, message: str):
    """Helper function to create a commit in the test repository."""
    file_path = Path(repo.working_dir) / file_name
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content)
    repo.index.add([file_name])
    return repo.index.commit(message)


@pytest.fixture
def make_commit():
    return create_commit


@pytest.fixture
def origin_path(tmp_path):
    """Bare repository standing in for the remote."""
    path = tmp_path / "origin.git"
    Repo.init(path, bare=True)
    return path


@pytest.fixture
def work_repo(tmp_path, origin_path):
    """Working repository on 'main' with one commit already on origin/main."""
    repo = Repo.init(tmp_path / "work")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test Author")
        writer.set_value("user", "email", "author@example.com")

    create_commit(repo, "app.py", "print('v1')\n", "Initial commit")
    repo.git.branch("-M", "main")

    origin = repo.create_remote("origin", str(origin_path))
    origin.push("refs/heads/main:refs/heads/main")
    origin.fetch()
    return repo


@pytest.fixture
def github_repo(work_repo, origin_path):
    """Working repository whose origin looks like GitHub but resolves to the bare repo."""
    work_repo.remotes.origin.set_url(GITHUB_URL)
    work_repo.git.config(f"url.{origin_path}.insteadOf", GITHUB_URL)
    return work_repo


class RecordingReporter:
    """Reporter that keeps messages instead of printing them."""

    def __init__(self):
        self.messages = []

    def success(self, message):
        self.messages.append(("success", message))

    def info(self, message):
        self.messages.append(("info", message))

    def warning(self, message):
        self.messages.append(("warning", message))

    def error(self, message):
        self.messages.append(("error", message))

    def of_level(self, level):
        return [message for kind, message in self.messages if kind == level]


class FakeProvider:
    """Pull-request provider recording requests and returning canned responses."""

    def __init__(self, merged=True):
        self.created = []
        self.merges = []
        self.merged = merged

    def create_pull_request(self, request):
        self.created.append(request)
        return PullRequestResponse(url=f"https://github.com/{request.owner}/{request.repo}/pull/42", number=42)

    def merge_pull_request(self, request):
        self.merges.append(request)
        if self.merged:
            return MergeResponse(sha="deadbeef", merged=True, message="Pull Request successfully merged")
        return MergeResponse(sha="", merged=False, message="Base branch is protected")


class FakeGenerator:
    """Content generator with fixed answers; an Exception value is raised instead."""

    def __init__(self, branch_name="", title="", description=""):
        self.answers = {"branch_name": branch_name, "title": title, "description": description}
        self.calls = []

    def _answer(self, key, diff):
        self.calls.append((key, diff))
        value = self.answers[key]
        if isinstance(value, Exception):
            raise value
        return value

    def generate_branch_name(self, diff):
        return self._answer("branch_name", diff)

    def generate_pr_title(self, diff):
        return self._answer("title", diff)

    def generate_pr_description(self, diff):
        return self._answer("description", diff)


class ScriptedPrompter:
    """Prompter answering from a list, recording every question."""

    def __init__(self, answers=(), confirm=True):
        self.answers = list(answers)
        self.confirm = confirm
        self.questions = []

    def yes_no(self, prompt):
        self.questions.append(prompt)
        return self.confirm

    def input(self, prompt):
        self.questions.append(prompt)
        return self.answers.pop(0) if self.answers else ""


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def provider():
    return FakeProvider()
