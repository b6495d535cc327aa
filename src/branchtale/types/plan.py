"""Types exchanged between content generation, planning and execution."""

from dataclasses import dataclass
from typing import List

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class GeneratedContent:
    """Text produced by a content generator for the current phase."""

    branch_name: str = ""
    title: str = ""
    description: str = ""


class Requirements(BaseModel):
    """Declarative action plan handed from the planner to the executor.

    The plan holds no execution results: owner and repo are resolved from the
    remote URL by the executor, so a plan can be logged or compared without
    touching the repository.
    """

    model_config = ConfigDict(frozen=True)

    create_branch: bool = Field(False, description="Create branch_name at HEAD and check it out")
    branch_name: str = Field("", description="Branch to create, push and open the pull request from")
    push_branch: bool = Field(False, description="Push branch_name to origin")
    base_branch: str = Field("", description="Trunk branch used as the pull request base")
    create_pull_request: bool = Field(False, description="Open a pull request from branch_name")
    pull_request_title: str = ""
    pull_request_description: str = ""
    pull_request_tags: List[str] = Field(default_factory=list)
    merge_pull_request: bool = Field(False, description="Merge the pull request once it is open")

    def is_empty(self) -> bool:
        """True when the plan triggers no action at all."""
        return not (self.create_branch or self.push_branch or self.create_pull_request)
