"""Account graph model."""

from typing import List

from pydantic import BaseModel, Field

from .project import Project
from .team import Team
from .user import User


class Account(BaseModel):
    """Everything exported from one Rollbar account."""

    projects: List[Project] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)
    users: List[User] = Field(default_factory=list)

    @property
    def access_token_count(self) -> int:
        """Number of access tokens across all projects."""
        return sum(len(project.access_tokens) for project in self.projects)

    class Config:
        """Pydantic configuration."""

        frozen = True
