"""Project and access token models."""

from typing import List, Optional

from pydantic import BaseModel, Field, validator


class AccessToken(BaseModel):
    """Rollbar project access token.

    Only the attributes the Terraform provider manages are kept; everything
    else the API returns is ignored.
    """

    access_token: str = Field(..., description='Token value')
    name: str = Field(..., description='Token name')
    project_id: int = Field(..., description='Owning project ID')
    rate_limit_window_size: Optional[int] = Field(
        default=None, description='Rate limit window size in seconds'
    )
    rate_limit_window_count: Optional[int] = Field(
        default=None, description='Requests allowed per rate limit window'
    )
    scopes: List[str] = Field(default_factory=list, description='Token scopes')
    status: Optional[str] = Field(default=None, description='enabled or disabled')

    @validator('scopes', pre=True)
    def validate_scopes(cls, v):
        """Treat a null scope list as empty."""
        return v or []

    class Config:
        """Pydantic configuration."""

        frozen = True


class Project(BaseModel):
    """Rollbar project model."""

    id: int = Field(..., description='Project ID')
    account_id: int = Field(..., description='Owning account ID')
    name: str = Field(..., description='Project name')
    access_tokens: List[AccessToken] = Field(
        default_factory=list, description='Access tokens of this project'
    )

    class Config:
        """Pydantic configuration."""

        frozen = True
