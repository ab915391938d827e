"""Renders an account as Terraform resources and import commands."""

from typing import List, Optional

from loguru import logger

from ..config.config import DEFAULT_PROVIDER_SOURCE, DEFAULT_PROVIDER_VERSION
from ..models.account import Account
from ..models.project import Project
from ..models.team import Team
from ..models.user import User
from .hcl import hcl_string, reference, render_resource
from .naming import ResourceNames

PROVIDER_NAME = 'rollbar'

TEAM = 'rollbar_team'
PROJECT = 'rollbar_project'
ACCESS_TOKEN = 'rollbar_project_access_token'
USER = 'rollbar_user'

# Levels rollbar_team.access_level accepts
TEAM_ACCESS_LEVELS = ('standard', 'light', 'view')


class TerraformRenderer:
    """Turns an :class:`Account` into HCL text.

    Each ``render_*`` method returns the blocks for one topic so callers can
    put them in one file or several.
    """

    def __init__(
        self,
        account: Account,
        provider_source: str = DEFAULT_PROVIDER_SOURCE,
        provider_version: str = DEFAULT_PROVIDER_VERSION,
    ):
        """Initialize renderer.

        Args:
            account: Exported account graph
            provider_source: Registry source of the Terraform provider
            provider_version: Pinned provider version
        """
        self.account = account
        self.provider_source = provider_source
        self.provider_version = provider_version
        self.names = ResourceNames(account)
        self.logger = logger.bind(component='TerraformRenderer')

    def render_provider(self) -> str:
        """Render the provider requirements and an empty provider block."""
        return (
            'terraform {\n'
            '  required_providers {\n'
            f'    {PROVIDER_NAME} = {{\n'
            f'      source = {hcl_string(self.provider_source)}\n'
            f'      version = {hcl_string(self.provider_version)}\n'
            '    }\n'
            '  }\n'
            '}\n'
            '\n'
            f'provider "{PROVIDER_NAME}" {{\n'
            '}\n'
            '\n'
        )

    def render_teams(self) -> str:
        """Render one ``rollbar_team`` per team."""
        blocks = [
            render_resource(
                TEAM,
                self.names.team(team),
                {'name': team.name, 'access_level': self.team_access_level(team)},
            )
            for team in self.account.teams
        ]
        self.logger.debug(f'Rendered {len(blocks)} team resources')
        return ''.join(blocks)

    def render_projects(self) -> str:
        """Render one ``rollbar_project`` per project, linked to its teams."""
        blocks = []
        for project in self.account.projects:
            teams = self.project_teams(project)
            attrs = {'name': project.name}
            if teams:
                attrs['team_ids'] = [reference(TEAM, name, 'id') for name in teams]
                attrs['depends_on'] = [reference(TEAM, name) for name in teams]
            blocks.append(render_resource(PROJECT, self.names.project(project), attrs))

        self.logger.debug(f'Rendered {len(blocks)} project resources')
        return ''.join(blocks)

    def render_access_tokens(self) -> str:
        """Render one ``rollbar_project_access_token`` per token."""
        blocks = []
        for project in self.account.projects:
            project_name = self.names.project(project)
            for token in project.access_tokens:
                attrs = {
                    'name': token.name,
                    'project_id': reference(PROJECT, project_name, 'id'),
                    'depends_on': [reference(PROJECT, project_name)],
                    'scopes': list(token.scopes),
                    'status': token.status,
                    'rate_limit_window_size': token.rate_limit_window_size,
                    'rate_limit_window_count': token.rate_limit_window_count,
                }
                blocks.append(
                    render_resource(
                        ACCESS_TOKEN, self.names.access_token(project, token), attrs
                    )
                )

        self.logger.debug(f'Rendered {len(blocks)} access token resources')
        return ''.join(blocks)

    def render_users(self) -> str:
        """Render one ``rollbar_user`` per user, linked to its teams."""
        blocks = []
        for user in self.account.users:
            attrs = {}
            if user.email:
                attrs['email'] = user.email
            teams = self.user_teams(user)
            if teams:
                attrs['team_ids'] = [reference(TEAM, name, 'id') for name in teams]
            blocks.append(render_resource(USER, self.names.user(user), attrs))

        self.logger.debug(f'Rendered {len(blocks)} user resources')
        return ''.join(blocks)

    def render_all(self) -> str:
        """Render every block for a single-file layout."""
        return (
            self.render_provider()
            + self.render_teams()
            + self.render_projects()
            + self.render_access_tokens()
            + self.render_users()
        )

    def import_commands(self) -> List[str]:
        """Build the ``terraform import`` command for every resource.

        Access tokens come first, then projects, teams and users.
        """
        commands = []
        for project in self.account.projects:
            for token in project.access_tokens:
                address = reference(ACCESS_TOKEN, self.names.access_token(project, token))
                commands.append(
                    f'terraform import {address} {project.id}/{token.access_token}'
                )

        for project in self.account.projects:
            address = reference(PROJECT, self.names.project(project))
            commands.append(f'terraform import {address} {project.id}')

        for team in self.account.teams:
            address = reference(TEAM, self.names.team(team))
            commands.append(f'terraform import {address} {team.id}')

        for user in self.account.users:
            address = reference(USER, self.names.user(user))
            commands.append(f'terraform import {address} {user.id}')

        return commands

    def render_import_script(self) -> str:
        """Render the import commands as a shell script."""
        return '#!/bin/sh\n' + ''.join(f'{line}\n' for line in self.import_commands())

    def project_teams(self, project: Project) -> List[str]:
        """Identifiers of the teams that list ``project``, in team order."""
        return [
            self.names.team(team)
            for team in self.account.teams
            if project.id in team.projects
        ]

    def user_teams(self, user: User) -> List[str]:
        """Identifiers of the declared teams ``user`` belongs to."""
        names = []
        for team in user.teams:
            name = self.names.team(team)
            if name is None:
                self.logger.warning(
                    f'User {user.id} belongs to unlisted team {team.id}, skipping it'
                )
                continue
            names.append(name)
        return names

    @staticmethod
    def team_access_level(team: Team) -> Optional[str]:
        """The team's access level if ``rollbar_team`` accepts it."""
        if team.access_level in TEAM_ACCESS_LEVELS:
            return team.access_level
        return None
