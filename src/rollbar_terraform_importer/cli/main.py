"""Main CLI entry point for Rollbar Terraform Importer."""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config.config import Config
from ..export.engine import ExportEngine, ExportSummary
from ..terraform import writer
from ..utils.logging import setup_logging

console = Console()

DEFAULT_CONFIG_PATHS = ['config.yaml', 'config.yml', '.rollbar-terraform.yaml']

FILE_LABELS = {
    writer.SINGLE_FILE: 'All Account Resources',
    writer.MAIN_FILE: 'Provider Configuration',
    writer.TEAMS_FILE: 'Team Resources',
    writer.PROJECTS_FILE: 'Project Resources',
    writer.ACCESS_TOKENS_FILE: 'Access Token Resources',
    writer.USERS_FILE: 'User Resources',
    writer.IMPORT_SCRIPT: 'Terraform Import Commands',
}


@click.group()
@click.version_option(version='0.1.0', prog_name='rollbar-terraform-importer')
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=True),
    help='Path to configuration file',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose logging',
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """Rollbar Terraform Importer - Export a Rollbar account as Terraform resources."""
    ctx.ensure_object(dict)

    if config:
        ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    # Basic logging until the configuration is loaded
    log_level = 'DEBUG' if verbose else 'WARNING'
    setup_logging(log_level)


@cli.command()
@click.option(
    '--access-token',
    '-t',
    default=None,
    help='Rollbar account access token with read scope',
)
@click.option(
    '--single-file',
    is_flag=True,
    help='Write all resources to a single rollbar_account.tf',
)
@click.option(
    '--out',
    '-o',
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    default=None,
    help='Output directory for generated files (default: current directory)',
)
@click.pass_context
def export(
    ctx: click.Context,
    access_token: Optional[str],
    single_file: bool,
    out: Optional[str],
) -> None:
    """Export the account as Terraform resources and import commands."""
    ctx.ensure_object(dict)
    console.print(
        Panel.fit(
            '[bold blue]Rollbar Terraform Importer[/bold blue]\n'
            'Exporting account resources...',
            border_style='blue',
        )
    )

    overrides = {
        'rollbar': {'access_token': access_token},
        'output': {'directory': out, 'single_file': True if single_file else None},
    }

    try:
        config = _load_config(ctx, overrides)
        _setup_logging_with_config(ctx, config)

        engine = ExportEngine(config)
        summary = engine.export()

        _display_export_summary(summary)

    except Exception as e:
        console.print(f'[red]✗[/red] Export failed: {_format_error(e)}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)


@cli.command()
@click.option(
    '--output',
    '-o',
    default='config.yaml',
    help='Output configuration file path',
)
@click.pass_context
def init(ctx: click.Context, output: str) -> None:
    """Initialize a new configuration file."""
    console.print(
        Panel.fit(
            '[bold green]Rollbar Terraform Importer[/bold green]\n'
            'Initializing configuration...',
            border_style='green',
        )
    )

    try:
        Config.create_template(output)

        console.print(f'[green]✓[/green] Configuration template created at: {output}')
        console.print(
            f'[yellow]Please edit {output} with your Rollbar access token[/yellow]'
        )

    except Exception as e:
        console.print(f'[red]✗[/red] Failed to create configuration: {e}')
        sys.exit(1)


@cli.command()
@click.option(
    '--access-token',
    '-t',
    default=None,
    help='Rollbar account access token with read scope',
)
@click.pass_context
def validate(ctx: click.Context, access_token: Optional[str]) -> None:
    """Validate the configuration and API connectivity."""
    ctx.ensure_object(dict)
    console.print(
        Panel.fit(
            '[bold cyan]Rollbar Terraform Importer[/bold cyan]\n'
            'Validating configuration...',
            border_style='cyan',
        )
    )

    try:
        config = _load_config(ctx, {'rollbar': {'access_token': access_token}})
        console.print('[green]✓[/green] Configuration validation completed')

        engine = ExportEngine(config)
        engine.test_connectivity()

        console.print('[green]✓[/green] Connectivity validation passed')

    except Exception as e:
        console.print(f'[red]✗[/red] Validation failed: {_format_error(e)}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the effective configuration."""
    ctx.ensure_object(dict)
    console.print(
        Panel.fit(
            '[bold magenta]Rollbar Terraform Importer[/bold magenta]\n'
            'Export Configuration',
            border_style='magenta',
        )
    )

    try:
        config = _load_config(ctx)
        _setup_logging_with_config(ctx, config)

        table = Table(title='Export Configuration')
        table.add_column('Setting', style='cyan')
        table.add_column('Value', style='green')

        table.add_row('API URL', config.rollbar.api_url)
        table.add_row('Access Token', _mask_token(config.rollbar.access_token))
        table.add_row('Output Directory', config.output.directory)
        table.add_row('Single File', '✓' if config.output.single_file else '✗')
        table.add_row(
            'Provider',
            f'{config.output.provider_source} {config.output.provider_version}',
        )
        table.add_row('Log Level', config.logging.level)

        console.print(table)

    except Exception as e:
        console.print(f'[red]✗[/red] Failed to load status: {_format_error(e)}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)


def _load_config(
    ctx: click.Context, overrides: Optional[Dict[str, Any]] = None
) -> Config:
    """Load configuration from file or environment, then apply CLI overrides."""
    config_path = ctx.obj.get('config_path')

    if config_path:
        if not Path(config_path).exists():
            raise FileNotFoundError(f'Configuration file not found: {config_path}')
        return Config.from_file(config_path, overrides=overrides)

    for path in DEFAULT_CONFIG_PATHS:
        if Path(path).exists():
            return Config.from_file(path, overrides=overrides)

    return Config.from_env(overrides=overrides)


def _setup_logging_with_config(ctx: click.Context, config: Config) -> None:
    """Setup logging with configuration from config file."""
    verbose = ctx.obj.get('verbose', False)

    # The verbose flag overrides the configured level
    log_level = 'DEBUG' if verbose else config.logging.level

    setup_logging(
        level=log_level,
        log_file=config.logging.file,
        log_format=config.logging.format,
    )


def _display_export_summary(summary: ExportSummary) -> None:
    """Display export summary results."""
    for path in summary.files:
        name = Path(path).name
        label = FILE_LABELS.get(name, 'Resources')
        console.print(f'[green]✓[/green] Rendered {label} to {name}')

    table = Table(title='Export Summary')
    table.add_column('Entity Type', style='cyan')
    table.add_column('Exported', style='green')

    for entity_type, count in summary.counts.items():
        table.add_row(entity_type.replace('_', ' ').title(), str(count))

    console.print(table)

    if summary.completed_at:
        duration = summary.completed_at - summary.started_at
        console.print(f'\n[blue]Export Duration:[/blue] {duration}')


def _format_error(error: Exception) -> str:
    """Flatten validation errors into their messages."""
    if isinstance(error, ValidationError):
        return '; '.join(_error_message(err) for err in error.errors())
    return str(error)


def _error_message(err: Dict[str, Any]) -> str:
    # Validator errors carry the raised exception; its text has no type prefix
    raised = (err.get('ctx') or {}).get('error')
    return str(raised) if raised is not None else err['msg']


def _mask_token(token: str) -> str:
    if len(token) <= 4:
        return '****'
    return token[:4] + '*' * (len(token) - 4)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print('\n[red]Export interrupted by user[/red]')
        sys.exit(1)


if __name__ == '__main__':
    main()
