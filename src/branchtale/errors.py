"""
Branchtale exceptions

Every failure raised by the inspector, provider, generators, planner and
executor derives from BranchtaleError so the CLI can report it in one place.
"""

from typing import Optional


class BranchtaleError(Exception):
    """Base exception for all branchtale failures."""


# ============================================================================
# REPOSITORY ACCESS
# ============================================================================


class RepositoryError(BranchtaleError):
    """Base exception for local repository failures."""


class RepoAccessError(RepositoryError):
    """Raised when the repository or its HEAD cannot be read."""


class HeadUnresolvedError(RepoAccessError):
    """Raised when HEAD does not point at a commit (e.g. an empty repository)."""

    def __init__(self, detail: str = "HEAD does not point at a commit"):
        super().__init__(f"Failed to resolve HEAD: {detail}")


class RefNotFoundError(RepositoryError):
    """Raised when a branch or remote-tracking ref does not exist."""

    def __init__(self, ref: str):
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


class BaseNotReachableError(RepositoryError):
    """Raised when the base commit is not an ancestor of the tip commit."""

    def __init__(self, base_ref: str, tip_ref: str):
        super().__init__(f"{base_ref} is not reachable from {tip_ref}; histories have diverged")
        self.base_ref = base_ref
        self.tip_ref = tip_ref


class DiffError(RepositoryError):
    """Raised when the patch between two refs cannot be produced."""


class RefAlreadyExistsError(RepositoryError):
    """Raised when creating a branch that already exists."""

    def __init__(self, branch_name: str):
        super().__init__(f"Branch '{branch_name}' already exists")
        self.branch_name = branch_name


class BranchNotFoundError(RepositoryError):
    """Raised when checking out a branch that does not exist."""

    def __init__(self, branch_name: str):
        super().__init__(f"Branch '{branch_name}' not found")
        self.branch_name = branch_name


class WorktreeError(RepositoryError):
    """Raised when the working tree refuses a checkout."""


class RemoteNotFoundError(RepositoryError):
    """Raised when the named remote is not configured."""

    def __init__(self, remote_name: str):
        super().__init__(f"Remote '{remote_name}' is not configured")
        self.remote_name = remote_name


# ============================================================================
# REMOTE COMMUNICATION
# ============================================================================


class RemoteError(BranchtaleError):
    """Base exception for failures talking to the git remote."""


class RemoteListError(RemoteError):
    """Raised when the remote refs cannot be listed."""


class AuthError(RemoteError):
    """Raised when the remote rejects our credentials."""


class NetworkError(RemoteError):
    """Raised when the remote cannot be reached or the transfer fails."""


class NonFastForwardError(RemoteError):
    """Raised when the remote rejects a push that is not a fast-forward."""


# ============================================================================
# REMOTE URL PARSING
# ============================================================================


class UnsupportedRemoteURLError(BranchtaleError):
    """Base exception for remote URLs we cannot map to an owner/repo pair."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Unsupported remote URL '{url}': {reason}")
        self.url = url


class UnsupportedHostError(UnsupportedRemoteURLError):
    """Raised when the remote is not hosted on github.com."""

    def __init__(self, url: str):
        super().__init__(url, "not a GitHub URL")


class MalformedRemotePathError(UnsupportedRemoteURLError):
    """Raised when the URL path is not exactly <owner>/<repo>."""

    def __init__(self, url: str):
        super().__init__(url, "expected <owner>/<repo>")


# ============================================================================
# PROVIDER, CONTENT, PLANNING, CONFIG
# ============================================================================


class ProviderError(BranchtaleError):
    """Raised when the pull-request provider call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderAuthError(ProviderError):
    """Raised when the provider rejects the token."""


class ContentGenerationError(BranchtaleError):
    """Raised when a branch name, title or description cannot be generated."""


class InputClosedError(ContentGenerationError):
    """Raised when standard input closes before the user answers."""

    def __init__(self, prompt: str):
        super().__init__(f"No answer for '{prompt}': input stream closed")
        self.prompt = prompt


class PlanError(BranchtaleError):
    """Raised when a plan cannot be built or is inconsistent."""


class EmptyBranchNameError(PlanError):
    """Raised when a plan needs a branch name but none was produced."""

    def __init__(self):
        super().__init__("Branch name is empty; refusing to create or push a branch")


class EmptyTitleError(PlanError):
    """Raised when a pull request would be opened without a title."""

    def __init__(self):
        super().__init__("Pull request title is empty")


class UnresolvedBaseBranchError(PlanError):
    """Raised when a pull request has no base branch."""

    def __init__(self):
        super().__init__("Base branch for the pull request is not resolved")


class ConfigError(BranchtaleError):
    """Raised for missing or contradictory configuration."""


class WorkflowAborted(BranchtaleError):
    """Raised when the user declines to execute the plan."""
