"""Team entity models."""

from typing import List, Optional

from pydantic import BaseModel, Field


class Team(BaseModel):
    """Rollbar team model.

    ``users`` and ``projects`` hold the IDs returned by the team membership
    endpoints.
    """

    id: int = Field(..., description='Team ID')
    account_id: int = Field(..., description='Owning account ID')
    access_level: Optional[str] = Field(
        default=None, description='Team access level (standard, light, view)'
    )
    name: str = Field(..., description='Team name')
    users: List[int] = Field(default_factory=list, description='Member user IDs')
    projects: List[int] = Field(default_factory=list, description='Project IDs')

    class Config:
        """Pydantic configuration."""

        frozen = True


class TeamProject(BaseModel):
    """Row of the team/projects association."""

    team_id: int
    project_id: int


class TeamUser(BaseModel):
    """Row of the team/users association."""

    team_id: int
    user_id: int
