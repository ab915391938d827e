"""Tests for CLI interface."""

import os

import pytest
import yaml
from unittest.mock import patch
from click.testing import CliRunner
from loguru import logger

from rollbar_terraform_importer.api.client import RollbarClient
from rollbar_terraform_importer.cli.main import cli

from conftest import ACCESS_TOKEN, ENV_VARS


def flat(output: str) -> str:
    """Collapse whitespace so rich line wrapping does not matter."""
    return ' '.join(output.split())


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch, tmp_path):
    """Run every command from an empty directory with a clean environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    # Drop sinks bound to the runner's closed streams
    logger.remove()


class TestCLI:
    """Test CLI commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_cli_help(self):
        """Test CLI help command."""
        result = self.runner.invoke(cli, ['--help'])

        assert result.exit_code == 0
        assert 'Rollbar Terraform Importer' in result.output
        assert 'export' in result.output
        assert 'init' in result.output
        assert 'validate' in result.output
        assert 'status' in result.output

    def test_cli_version(self):
        """Test CLI version command."""
        result = self.runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_export_split_files(self, isolated_cwd, mock_rollbar_api):
        """Test a successful export into the current directory."""
        result = self.runner.invoke(cli, ['export', '--access-token', ACCESS_TOKEN])

        assert result.exit_code == 0, result.output
        output = flat(result.output)
        assert 'Rendered Team Resources to teams.tf' in output
        assert 'Rendered Terraform Import Commands to import.sh' in output
        assert 'Export Summary' in output
        for name in ['main.tf', 'teams.tf', 'projects.tf', 'access_tokens.tf', 'users.tf']:
            assert (isolated_cwd / name).exists()

    def test_export_single_file(self, tmp_path, mock_rollbar_api):
        """Test --single-file and --out."""
        out = tmp_path / 'terraform'
        out.mkdir()

        result = self.runner.invoke(
            cli,
            ['export', '-t', ACCESS_TOKEN, '--single-file', '--out', str(out)],
        )

        assert result.exit_code == 0, result.output
        assert 'Rendered All Account Resources to rollbar_account.tf' in flat(
            result.output
        )
        assert sorted(os.listdir(out)) == ['import.sh', 'rollbar_account.tf']

    def test_export_token_from_env(self, monkeypatch, mock_rollbar_api):
        """Test the token can come from the environment."""
        monkeypatch.setenv('ROLLBAR_ACCESS_TOKEN', ACCESS_TOKEN)

        result = self.runner.invoke(cli, ['export'])

        assert result.exit_code == 0, result.output

    def test_export_token_from_config_file(self, isolated_cwd, mock_rollbar_api):
        """Test the token can come from config.yaml in the working directory."""
        (isolated_cwd / 'config.yaml').write_text(
            yaml.dump({'rollbar': {'access_token': ACCESS_TOKEN}})
        )

        result = self.runner.invoke(cli, ['export'])

        assert result.exit_code == 0, result.output

    def test_export_missing_token(self):
        """Test a missing token exits with an error."""
        result = self.runner.invoke(cli, ['export'])

        assert result.exit_code == 1
        output = flat(result.output)
        assert '✗ Export failed: A Rollbar access token must be provided.' in output
        assert 'Value error' not in output

    def test_export_invalid_token(self):
        """Test a malformed token exits with an error."""
        result = self.runner.invoke(cli, ['export', '--access-token', 'bad-token!'])

        assert result.exit_code == 1
        output = flat(result.output)
        assert (
            '✗ Export failed: Provided access token is not a valid access token.'
            in output
        )
        assert 'Value error' not in output

    def test_export_missing_output_directory(self, tmp_path):
        """Test a nonexistent output path is a usage error."""
        result = self.runner.invoke(
            cli,
            ['export', '-t', ACCESS_TOKEN, '--out', str(tmp_path / 'missing')],
        )

        assert result.exit_code == 2

    @patch('requests.Session.get')
    def test_export_api_failure(self, mock_get):
        """Test API errors are reported and exit non-zero."""
        mock_get.return_value.status_code = 401
        mock_get.return_value.headers = {}

        result = self.runner.invoke(cli, ['export', '-t', ACCESS_TOKEN])

        assert result.exit_code == 1
        assert 'Export failed: Authentication failed' in flat(result.output)

    @patch('rollbar_terraform_importer.cli.main.console.print_exception')
    def test_error_handling_with_verbose(self, mock_print_exception):
        """Test tracebacks are printed with the verbose flag."""
        result = self.runner.invoke(cli, ['--verbose', 'export'])

        assert result.exit_code == 1
        mock_print_exception.assert_called_once()

    def test_init_command(self, tmp_path):
        """Test init command."""
        config_path = tmp_path / 'conf' / 'test_config.yaml'

        result = self.runner.invoke(cli, ['init', '--output', str(config_path)])

        assert result.exit_code == 0
        assert 'Configuration template created' in flat(result.output)
        content = config_path.read_text()
        assert 'rollbar:' in content
        assert 'output:' in content

    def test_init_command_default_output(self, isolated_cwd):
        """Test init command with default output."""
        result = self.runner.invoke(cli, ['init'])

        assert result.exit_code == 0
        assert (isolated_cwd / 'config.yaml').exists()

    @patch.object(RollbarClient, 'test_connection', return_value=True)
    def test_validate_command_success(self, mock_test_connection):
        """Test successful validate command."""
        result = self.runner.invoke(cli, ['validate', '-t', ACCESS_TOKEN])

        assert result.exit_code == 0
        output = flat(result.output)
        assert 'Configuration validation completed' in output
        assert 'Connectivity validation passed' in output

    @patch.object(RollbarClient, 'test_connection', return_value=False)
    def test_validate_command_failure(self, mock_test_connection):
        """Test validate command failure."""
        result = self.runner.invoke(cli, ['validate', '-t', ACCESS_TOKEN])

        assert result.exit_code == 1
        assert 'Validation failed' in flat(result.output)

    def test_status_command(self, tmp_path):
        """Test status shows the configuration with a masked token."""
        config_path = tmp_path / 'status.yaml'
        config_path.write_text(
            yaml.dump(
                {
                    'rollbar': {'access_token': ACCESS_TOKEN},
                    'output': {'directory': '/srv/tf', 'provider_version': '1.1.0'},
                }
            )
        )

        result = self.runner.invoke(cli, ['--config', str(config_path), 'status'])

        assert result.exit_code == 0, result.output
        output = flat(result.output)
        assert 'Export Configuration' in output
        assert '/srv/tf' in output
        assert 'rollbar/rollbar 1.1.0' in output
        assert ACCESS_TOKEN not in output
        assert ACCESS_TOKEN[:4] in output

    def test_status_command_failure(self):
        """Test status command failure without any configuration."""
        result = self.runner.invoke(cli, ['status'])

        assert result.exit_code == 1
        assert 'Failed to load status' in flat(result.output)
