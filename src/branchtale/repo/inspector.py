"""
Repository inspection and mutation for the branchtale workflow.

Wraps the local ref graph and the "origin" remote through GitPython: which
branch is checked out, which branch is the trunk, what lies between two refs,
and the few mutations the executor needs (branch, checkout, push).
"""

from configparser import NoOptionError, NoSectionError
from typing import Dict, List

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, PushInfo, Repo, SymbolicReference
from git.objects.commit import Commit
from git.remote import Remote
from loguru import logger

from branchtale.errors import (
    AuthError,
    BaseNotReachableError,
    BranchNotFoundError,
    DiffError,
    HeadUnresolvedError,
    NetworkError,
    NonFastForwardError,
    RefAlreadyExistsError,
    RefNotFoundError,
    RemoteError,
    RemoteListError,
    RemoteNotFoundError,
    RepoAccessError,
    RepositoryError,
    WorktreeError,
)
from branchtale.types.repo import CommitInfo, DiffInfo, RepoInfo

# Trunk candidates in priority order
MAIN_BRANCH_CANDIDATES = ("main", "master")
DEFAULT_MAIN_BRANCH = "master"

AUTH_FAILURE_MARKERS = (
    "permission denied",
    "authentication failed",
    "could not read username",
    "invalid username or password",
    "host key verification failed",
)
NETWORK_FAILURE_MARKERS = (
    "could not resolve host",
    "connection refused",
    "connection timed out",
    "unable to access",
    "could not read from remote repository",
    "does not appear to be a git repository",
)
REJECTION_MARKERS = ("non-fast-forward", "rejected", "fetch first")


class RepositoryInspector:
    """Read-only and mutating queries against a local repository."""

    def __init__(self, repo_path: str, ssh_key_path: str = None):
        """Open the repository containing repo_path.

        Args:
            repo_path: Any path inside the working tree.
            ssh_key_path: Identity file used for ls-remote and push, if any.
        """
        try:
            self.repo = Repo(repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepoAccessError(f"Not a git repository (or any of the parent directories): {repo_path}") from e
        self.ssh_key_path = ssh_key_path
        logger.debug(f"Opened repository at {self.repo.working_dir}")

    def get_info(self) -> RepoInfo:
        """Read the checked-out branch and detect the trunk branch."""
        head = self.repo.head
        if not head.is_valid():
            raise HeadUnresolvedError("the repository has no commits")
        if head.is_detached:
            raise RepoAccessError("HEAD is detached; check out a branch first")

        current_branch = head.reference.name
        main_branch = self._detect_main_branch()
        logger.debug(f"Current branch: {current_branch}, trunk: {main_branch}")
        return RepoInfo(current_branch=current_branch, main_branch=main_branch)

    def _detect_main_branch(self) -> str:
        """Pick the trunk from sorted local branch names, 'main' before 'master'."""
        names = self._local_branch_names()
        for candidate in MAIN_BRANCH_CANDIDATES:
            if candidate in names:
                return candidate
        return DEFAULT_MAIN_BRANCH

    def _local_branch_names(self) -> List[str]:
        return sorted(head.name for head in self.repo.heads)

    def diff_between(self, remote_name: str, remote_branch: str, local_branch: str) -> DiffInfo:
        """Collect the commits and patch that local_branch adds on top of remote_name/remote_branch.

        The remote tree is the "from" side of the patch and the local tree the
        "to" side. Commits are newest-first and exclude the remote commit.
        """
        local_ref = f"refs/heads/{local_branch}"
        remote_ref = f"refs/remotes/{remote_name}/{remote_branch}"
        local_commit = self._resolve_commit(local_ref)
        remote_commit = self._resolve_commit(remote_ref)

        commits = self._commits_between(remote_commit, local_commit, remote_ref, local_ref)
        if not commits:
            logger.debug(f"{local_ref} has no commits ahead of {remote_ref}")
            return DiffInfo()

        try:
            diff = self.repo.git.diff("--no-color", "--no-ext-diff", remote_commit.hexsha, local_commit.hexsha)
        except GitCommandError as e:
            raise DiffError(f"Failed to generate patch between {remote_ref} and {local_ref}: {e}") from e

        logger.debug(f"Found {len(commits)} commit(s) in {remote_ref}..{local_ref}")
        return DiffInfo(diff=diff, commits=commits)

    def _resolve_commit(self, path: str) -> Commit:
        try:
            return SymbolicReference(self.repo, path).commit
        except (ValueError, TypeError) as e:
            raise RefNotFoundError(path) from e

    def _commits_between(self, base: Commit, tip: Commit, base_ref: str, tip_ref: str) -> List[CommitInfo]:
        """Walk back from tip in topological order until base is reached.

        rev-list stops at root commits, so a base that is never met ends the
        walk and is reported instead of returning the whole history.
        """
        commits = []
        try:
            for commit in self.repo.iter_commits(tip.hexsha, topo_order=True):
                if commit.hexsha == base.hexsha:
                    return commits
                commits.append(CommitInfo.from_git_commit(commit))
        except GitCommandError as e:
            raise DiffError(f"Failed to walk history of {tip_ref}: {e}") from e
        raise BaseNotReachableError(base_ref, tip_ref)

    def branch_exists_on_remote(self, branch_name: str, remote_name: str) -> bool:
        """Check the remote's advertised heads for exactly refs/heads/<branch_name>."""
        self._get_remote(remote_name)
        try:
            with self.repo.git.custom_environment(**self._ssh_environment()):
                output = self.repo.git.ls_remote("--heads", remote_name)
        except GitCommandError as e:
            raise self._remote_failure(e, RemoteListError, f"Failed to list refs on '{remote_name}'") from e

        target = f"refs/heads/{branch_name}"
        for line in output.splitlines():
            parts = line.strip().split("\t")
            if len(parts) == 2 and parts[1] == target:
                return True
        return False

    def create_branch(self, branch_name: str) -> None:
        """Create branch_name at HEAD without checking it out."""
        if not self.repo.head.is_valid():
            raise HeadUnresolvedError()
        if branch_name in self._local_branch_names():
            raise RefAlreadyExistsError(branch_name)
        try:
            self.repo.git.branch(branch_name)
        except GitCommandError as e:
            if "already exists" in str(e.stderr):
                raise RefAlreadyExistsError(branch_name) from e
            raise RepositoryError(f"Failed to create branch '{branch_name}': {e.stderr.strip()}") from e
        logger.debug(f"Created branch {branch_name} at {self.repo.head.commit.hexsha[:8]}")

    def checkout_branch(self, branch_name: str) -> None:
        if branch_name not in self._local_branch_names():
            raise BranchNotFoundError(branch_name)
        try:
            self.repo.heads[branch_name].checkout()
        except GitCommandError as e:
            raise WorktreeError(f"Failed to check out branch '{branch_name}': {e.stderr.strip()}") from e
        logger.debug(f"Checked out {branch_name}")

    def push_branch(self, branch_name: str, remote_name: str) -> None:
        """Push refs/heads/<branch_name> to the same ref on the remote."""
        remote = self._get_remote(remote_name)
        if branch_name not in self._local_branch_names():
            raise BranchNotFoundError(branch_name)

        refspec = f"refs/heads/{branch_name}:refs/heads/{branch_name}"
        try:
            with self.repo.git.custom_environment(**self._ssh_environment()):
                results = remote.push(refspec=refspec)
        except GitCommandError as e:
            raise self._remote_failure(e, NetworkError, f"Failed to push '{branch_name}' to '{remote_name}'") from e

        if not results:
            raise NetworkError(f"Failed to push '{branch_name}' to '{remote_name}': no result from remote")
        for info in results:
            if info.flags & (PushInfo.REJECTED | PushInfo.REMOTE_REJECTED):
                raise NonFastForwardError(
                    f"Push of '{branch_name}' to '{remote_name}' was rejected: {info.summary.strip()}"
                )
            if info.flags & (PushInfo.ERROR | PushInfo.REMOTE_FAILURE):
                raise NetworkError(f"Failed to push '{branch_name}' to '{remote_name}': {info.summary.strip()}")
        logger.debug(f"Pushed {refspec} to {remote_name}")

    def get_remote_url(self, remote_name: str) -> str:
        remote = self._get_remote(remote_name)
        try:
            return remote.url
        except (NoOptionError, NoSectionError) as e:
            raise RemoteNotFoundError(remote_name) from e

    def _get_remote(self, remote_name: str) -> Remote:
        for remote in self.repo.remotes:
            if remote.name == remote_name:
                return remote
        raise RemoteNotFoundError(remote_name)

    def _ssh_environment(self) -> Dict[str, str]:
        if not self.ssh_key_path:
            return {}
        return {"GIT_SSH_COMMAND": f'ssh -i "{self.ssh_key_path}" -o IdentitiesOnly=yes'}

    @staticmethod
    def _remote_failure(error: GitCommandError, default: type, context: str) -> RemoteError:
        """Map git's stderr onto the remote error taxonomy."""
        stderr = str(error.stderr or "").strip()
        lowered = stderr.lower()
        message = f"{context}: {stderr or error}"
        if any(marker in lowered for marker in AUTH_FAILURE_MARKERS):
            return AuthError(message)
        if any(marker in lowered for marker in REJECTION_MARKERS):
            return NonFastForwardError(message)
        if any(marker in lowered for marker in NETWORK_FAILURE_MARKERS):
            return NetworkError(message)
        return default(message)
