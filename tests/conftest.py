"""Shared fixtures for Rollbar Terraform Importer tests."""

from unittest.mock import Mock, patch

import pytest

from rollbar_terraform_importer.config.config import (
    Config,
    OutputConfig,
    RollbarConfig,
)
from rollbar_terraform_importer.models import (
    Account,
    AccessToken,
    Project,
    Team,
    User,
)

ACCESS_TOKEN = 'abcdef0123456789'

ENV_VARS = [
    'ROLLBAR_ACCESS_TOKEN',
    'ROLLBAR_API_URL',
    'ROLLBAR_TIMEOUT',
    'OUTPUT_DIR',
    'OUTPUT_SINGLE_FILE',
    'TERRAFORM_PROVIDER_SOURCE',
    'TERRAFORM_PROVIDER_VERSION',
    'LOG_LEVEL',
    'LOG_FILE',
]

OWNERS = {'id': 1, 'account_id': 7, 'access_level': 'owner', 'name': 'Owners'}
DEV_TEAM = {'id': 2, 'account_id': 7, 'access_level': 'light', 'name': 'Dev Team (EU)'}

API_RESULTS = {
    'projects': [
        {'id': 10, 'account_id': 7, 'name': 'Web App', 'status': 'enabled'},
        {'id': 11, 'account_id': 7, 'name': None, 'status': 'deleted'},
        {'id': 12, 'account_id': 7, 'name': 'backend.api', 'status': 'enabled'},
    ],
    'project/10/access_tokens': [
        {
            'access_token': 'abc123',
            'name': 'post_server_item',
            'project_id': 10,
            'rate_limit_window_size': 60,
            'rate_limit_window_count': 100,
            'scopes': ['post_server_item'],
            'status': 'enabled',
        }
    ],
    'project/12/access_tokens': None,
    'teams': [OWNERS, DEV_TEAM],
    'team/1/projects': [
        {'team_id': 1, 'project_id': 10},
        {'team_id': 1, 'project_id': 12},
    ],
    'team/1/users': [{'team_id': 1, 'user_id': 100}],
    'team/2/projects': [{'team_id': 2, 'project_id': 10}],
    'team/2/users': [
        {'team_id': 2, 'user_id': 100},
        {'team_id': 2, 'user_id': 101},
    ],
    'users': {
        'users': [
            {'id': 100, 'email': 'alice@example.com', 'username': 'alice'},
            {'id': 101, 'email': 'bob@example.com', 'username': 'bob.smith'},
        ]
    },
    'user/100/teams': {'teams': [OWNERS, DEV_TEAM]},
    'user/101/teams': {'teams': [DEV_TEAM]},
}


def make_response(result=None, err=0, status_code=200, message=None):
    """Build a mocked ``requests.Response`` carrying a Rollbar envelope."""
    payload = {'err': err, 'result': result}
    if message is not None:
        payload['message'] = message

    response = Mock()
    response.status_code = status_code
    response.headers = {'Content-Type': 'application/json'}
    response.json.return_value = payload
    response.text = str(payload)
    return response


@pytest.fixture
def rollbar_config():
    """API configuration with a valid token."""
    return RollbarConfig(access_token=ACCESS_TOKEN)


@pytest.fixture
def config(tmp_path, rollbar_config):
    """Full configuration writing into a temporary directory."""
    return Config(
        rollbar=rollbar_config,
        output=OutputConfig(directory=str(tmp_path)),
    )


@pytest.fixture
def mock_rollbar_api():
    """Patch ``requests.Session.get`` to answer from ``API_RESULTS``."""

    def fake_get(url, params=None, **kwargs):
        endpoint = url.split('/api/1/', 1)[1]
        return make_response(API_RESULTS[endpoint])

    with patch('requests.Session.get', side_effect=fake_get) as mock_get:
        yield mock_get


@pytest.fixture
def account():
    """Account graph equivalent to what ``API_RESULTS`` produces."""
    owners = Team(**OWNERS, projects=[10, 12], users=[100])
    dev_team = Team(**DEV_TEAM, projects=[10], users=[100, 101])

    return Account(
        projects=[
            Project(
                id=10,
                account_id=7,
                name='Web App',
                access_tokens=[
                    AccessToken(
                        access_token='abc123',
                        name='post_server_item',
                        project_id=10,
                        rate_limit_window_size=60,
                        rate_limit_window_count=100,
                        scopes=['post_server_item'],
                    )
                ],
            ),
            Project(id=12, account_id=7, name='backend.api'),
        ],
        teams=[owners, dev_team],
        users=[
            User(
                id=100,
                email='alice@example.com',
                username='alice',
                teams=[Team(**OWNERS), Team(**DEV_TEAM)],
            ),
            User(
                id=101,
                email='bob@example.com',
                username='bob.smith',
                teams=[Team(**DEV_TEAM)],
            ),
        ],
    )
