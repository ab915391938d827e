"""Data models for Rollbar entities."""

from .account import Account
from .envelope import APIEnvelope
from .project import AccessToken, Project
from .team import Team, TeamProject, TeamUser
from .user import User

__all__ = [
    'Account',
    'APIEnvelope',
    'AccessToken',
    'Project',
    'Team',
    'TeamProject',
    'TeamUser',
    'User',
]
