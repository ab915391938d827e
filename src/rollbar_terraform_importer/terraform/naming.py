"""Resource identifiers for an exported account."""

from typing import Dict, Optional, Tuple

from ..models.account import Account
from ..models.project import AccessToken, Project
from ..models.team import Team
from ..models.user import User
from .hcl import sanitize_identifier, unique_identifiers


class ResourceNames:
    """Identifier lookup tables, built once per account.

    Declarations and references both resolve names through these tables, so
    a reference can never point at an identifier that was not declared.
    """

    def __init__(self, account: Account):
        self.teams: Dict[int, str] = unique_identifiers(
            (team.id, team.name) for team in account.teams
        )
        self.projects: Dict[int, str] = unique_identifiers(
            (project.id, project.name) for project in account.projects
        )
        self.users: Dict[int, str] = unique_identifiers(
            (user.id, user.display_name) for user in account.users
        )
        self.access_tokens: Dict[Tuple[int, str], str] = unique_identifiers(
            (
                (project.id, token.access_token),
                f'{self.projects[project.id]}_{sanitize_identifier(token.name)}',
            )
            for project in account.projects
            for token in project.access_tokens
        )

    def team(self, team: Team) -> Optional[str]:
        # A user's teams come from a separate endpoint and may include teams
        # missing from the account listing; those have no identifier.
        return self.teams.get(team.id)

    def project(self, project: Project) -> str:
        return self.projects[project.id]

    def user(self, user: User) -> str:
        return self.users[user.id]

    def access_token(self, project: Project, token: AccessToken) -> str:
        return self.access_tokens[(project.id, token.access_token)]
