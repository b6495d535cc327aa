"""Configuration loading from the environment and command-line overrides."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from branchtale.errors import ConfigError
from branchtale.generators.groq import DEFAULT_MODEL
from branchtale.vcs.github import DEFAULT_API_URL, DEFAULT_MERGE_METHOD

CONTENT_GENERATION_MODES = ("local", "groq")
MERGE_METHODS = ("merge", "squash", "rebase")


@dataclass
class Config:
    """Settings for a single branchtale run."""

    github_token: str
    repo_path: str = "."
    content_generation: str = "local"
    groq_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    branch_prefix: str = ""
    ssh_key_path: Optional[str] = None
    github_api_url: str = DEFAULT_API_URL
    verbose: bool = False
    dry_run: bool = False
    interactive: bool = True
    merge: bool = False
    merge_method: str = DEFAULT_MERGE_METHOD
    tags: List[str] = field(default_factory=list)

    @property
    def use_ai(self) -> bool:
        return self.content_generation != "local"


def default_ssh_key_path() -> Optional[str]:
    path = os.path.expanduser(os.path.join("~", ".ssh", "id_rsa"))
    return path if os.path.isfile(path) else None


def load_config(**overrides) -> Config:
    """Build a Config from environment variables, then apply non-None overrides.

    Raises:
        ConfigError: a required credential is missing or the options contradict each other
    """
    github_token = os.getenv("GITHUB_TOKEN")
    if not github_token:
        raise ConfigError("GITHUB_TOKEN environment variable is required")

    values = {
        "github_token": github_token,
        "content_generation": os.getenv("CONTENT_GENERATION") or "local",
        "groq_api_key": os.getenv("GROQ_API_KEY"),
        "model": os.getenv("GROQ_MODEL") or DEFAULT_MODEL,
        "branch_prefix": os.getenv("BRANCH_PREFIX", ""),
        "ssh_key_path": os.getenv("BRANCHTALE_SSH_KEY") or default_ssh_key_path(),
        "github_api_url": os.getenv("GITHUB_API_URL") or DEFAULT_API_URL,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    config = Config(**values)

    if config.content_generation not in CONTENT_GENERATION_MODES:
        raise ConfigError(
            f"Unknown content generation mode '{config.content_generation}' "
            f"(expected one of: {', '.join(CONTENT_GENERATION_MODES)})"
        )
    if config.use_ai and not config.groq_api_key:
        raise ConfigError("GROQ_API_KEY environment variable is required for 'groq' content generation")
    if not config.use_ai and not config.interactive:
        raise ConfigError("'local' content generation requires interactive mode")
    if config.merge_method not in MERGE_METHODS:
        raise ConfigError(f"Unknown merge method '{config.merge_method}'")

    return config
