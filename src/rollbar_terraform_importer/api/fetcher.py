"""Builds the account object graph from the Rollbar API."""

from typing import Any, Dict, List

from loguru import logger

from ..models.account import Account
from ..models.project import AccessToken, Project
from ..models.team import Team, TeamProject, TeamUser
from ..models.user import User
from .client import RollbarClient


class AccountFetcher:
    """Reads projects, teams, users and their associations.

    Requests are issued one after another. Any API error propagates to the
    caller: an export is only useful when every request succeeded.
    """

    def __init__(self, client: RollbarClient):
        """Initialize account fetcher.

        Args:
            client: Authenticated Rollbar client
        """
        self.client = client
        self.logger = logger.bind(component='AccountFetcher')

    def fetch_account(self) -> Account:
        """Fetch the whole account graph.

        Returns:
            Account with projects, teams and users populated
        """
        projects = self.fetch_projects()
        teams = self.fetch_teams()
        users = self.fetch_users()

        self.logger.info(
            f'Fetched {len(projects)} projects, {len(teams)} teams, '
            f'{len(users)} users'
        )
        return Account(projects=projects, teams=teams, users=users)

    def fetch_projects(self) -> List[Project]:
        """Fetch projects along with their access tokens.

        Returns:
            List of projects
        """
        projects = []
        for raw in self._result_list(self.client.get('projects').result):
            if not raw.get('name'):
                # Deleted projects are still listed, without a name
                self.logger.warning(f'Skipping unnamed project {raw.get("id")}')
                continue

            data = dict(raw)
            data['access_tokens'] = self._fetch_project_access_tokens(raw['id'])
            projects.append(Project(**data))

        self.logger.info(f'Fetched {len(projects)} projects')
        return projects

    def fetch_teams(self) -> List[Team]:
        """Fetch teams along with their project and user IDs.

        Returns:
            List of teams
        """
        teams = []
        for raw in self._result_list(self.client.get('teams').result):
            team_id = raw['id']
            data = dict(raw)
            data['projects'] = self._fetch_team_projects(team_id)
            data['users'] = self._fetch_team_users(team_id)
            teams.append(Team(**data))

        self.logger.info(f'Fetched {len(teams)} teams')
        return teams

    def fetch_users(self) -> List[User]:
        """Fetch users along with the teams they belong to.

        Returns:
            List of users
        """
        result = self.client.get('users').result or {}

        users = []
        for raw in self._result_list(result.get('users')):
            data = dict(raw)
            data['teams'] = self._fetch_user_teams(raw['id'])
            users.append(User(**data))

        self.logger.info(f'Fetched {len(users)} users')
        return users

    def _fetch_project_access_tokens(self, project_id: int) -> List[AccessToken]:
        result = self.client.get(f'project/{project_id}/access_tokens').result
        tokens = [AccessToken(**raw) for raw in self._result_list(result)]
        self.logger.debug(f'Project {project_id}: {len(tokens)} access tokens')
        return tokens

    def _fetch_team_projects(self, team_id: int) -> List[int]:
        result = self.client.get(f'team/{team_id}/projects').result
        links = [TeamProject(**raw) for raw in self._result_list(result)]
        return [link.project_id for link in links]

    def _fetch_team_users(self, team_id: int) -> List[int]:
        result = self.client.get(f'team/{team_id}/users').result
        links = [TeamUser(**raw) for raw in self._result_list(result)]
        return [link.user_id for link in links]

    def _fetch_user_teams(self, user_id: int) -> List[Team]:
        result = self.client.get(f'user/{user_id}/teams').result or {}
        return [Team(**raw) for raw in self._result_list(result.get('teams'))]

    @staticmethod
    def _result_list(result: Any) -> List[Dict[str, Any]]:
        """Rollbar returns null rather than an empty list for no results."""
        return list(result or [])
