"""User entity models."""

from typing import List, Optional

from pydantic import BaseModel, Field, validator

from .team import Team


class User(BaseModel):
    """Rollbar user model."""

    id: int = Field(..., description='User ID')
    email: str = Field(default='', description='Email address')
    username: str = Field(default='', description='Username')
    teams: List[Team] = Field(
        default_factory=list, description='Teams the user belongs to'
    )

    @validator('email', 'username', pre=True)
    def validate_optional_text(cls, v):
        """Invited users may come back without a username or email."""
        return v or ''

    @property
    def display_name(self) -> str:
        """Name used to derive the resource identifier."""
        return self.username or self.email

    class Config:
        """Pydantic configuration."""

        frozen = True
