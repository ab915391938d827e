"""Rollbar response envelope."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class APIEnvelope(BaseModel):
    """Wrapper Rollbar puts around every API response body."""

    err: int = Field(..., description='Error code, 0 on success')
    result: Any = Field(default=None, description='Response payload')
    message: Optional[str] = Field(default=None, description='Error message')
