"""Export engine - main entry point for export operations."""

from datetime import datetime
from typing import Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from ..api.client import RollbarClient
from ..api.fetcher import AccountFetcher
from ..config.config import Config
from ..terraform.renderer import TerraformRenderer
from ..terraform.writer import TerraformWriter


class ExportSummary(BaseModel):
    """Summary of an export run."""

    counts: Dict[str, int] = Field(
        default_factory=dict, description='Exported entities by type'
    )
    files: List[str] = Field(default_factory=list, description='Written files')
    single_file: bool = Field(default=False, description='Single-file layout used')

    started_at: datetime = Field(..., description='Export start time')
    completed_at: Optional[datetime] = Field(
        default=None, description='Export completion time'
    )

    @property
    def total_entities(self) -> int:
        return sum(self.counts.values())


class ExportEngine:
    """Fetches a Rollbar account and writes it out as Terraform."""

    def __init__(self, config: Config):
        """Initialize export engine.

        Args:
            config: Export configuration
        """
        self.config = config
        self.logger = logger.bind(component='ExportEngine')

        self.client = RollbarClient(config.rollbar)
        self.fetcher = AccountFetcher(self.client)
        self.writer = TerraformWriter(config.output.directory)

    def export(self) -> ExportSummary:
        """Run fetch, render and write.

        Returns:
            Export summary
        """
        started_at = datetime.now()
        self.logger.info('Starting Rollbar account export')

        try:
            account = self.fetcher.fetch_account()

            renderer = TerraformRenderer(
                account,
                provider_source=self.config.output.provider_source,
                provider_version=self.config.output.provider_version,
            )
            paths = self.writer.write_account(
                renderer, single_file=self.config.output.single_file
            )

            summary = ExportSummary(
                counts={
                    'projects': len(account.projects),
                    'access_tokens': account.access_token_count,
                    'teams': len(account.teams),
                    'users': len(account.users),
                },
                files=[str(path) for path in paths],
                single_file=self.config.output.single_file,
                started_at=started_at,
                completed_at=datetime.now(),
            )

            self.logger.info('Export completed successfully')
            return summary

        except Exception as e:
            self.logger.error(f'Export failed: {e}')
            raise
        finally:
            self.client.close()

    def test_connectivity(self) -> None:
        """Test connectivity to the Rollbar API.

        Raises:
            ConnectionError: If connectivity test fails
        """
        self.logger.info('Testing connectivity to the Rollbar API')

        try:
            if not self.client.test_connection():
                raise ConnectionError('Cannot connect to the Rollbar API')
        finally:
            self.client.close()

        self.logger.info('Connectivity test passed')
