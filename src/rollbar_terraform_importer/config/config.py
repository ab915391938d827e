"""Configuration management for Rollbar Terraform Importer."""

from typing import Optional, Dict, Any
from pathlib import Path
import os

from pydantic import BaseModel, Field, validator
import yaml
from dotenv import load_dotenv

DEFAULT_API_URL = 'https://api.rollbar.com/api/1'
DEFAULT_PROVIDER_SOURCE = 'rollbar/rollbar'
DEFAULT_PROVIDER_VERSION = '1.0.6'
DEFAULT_LOG_FORMAT = (
    '{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[component]} | {message}'
)


class RollbarConfig(BaseModel):
    """Configuration for the Rollbar API."""

    access_token: str = Field(default='', description='Account access token')
    api_url: str = Field(default=DEFAULT_API_URL, description='Rollbar API base URL')
    timeout: int = Field(default=30, description='Request timeout in seconds')

    @validator('access_token', always=True)
    def validate_access_token(cls, v):
        """Account tokens are made of letters and digits only."""
        if not v:
            raise ValueError('A Rollbar access token must be provided.')
        if not v.isalnum():
            raise ValueError('Provided access token is not a valid access token.')
        return v

    @validator('api_url')
    def validate_url(cls, v):
        """Validate API URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v.rstrip('/')

    @validator('timeout')
    def validate_timeout(cls, v):
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError('Timeout must be positive')
        return v


class OutputConfig(BaseModel):
    """Terraform output configuration."""

    directory: str = Field(default='.', description='Output directory')
    single_file: bool = Field(
        default=False, description='Write all resources to rollbar_account.tf'
    )
    provider_source: str = Field(
        default=DEFAULT_PROVIDER_SOURCE, description='Terraform provider source'
    )
    provider_version: str = Field(
        default=DEFAULT_PROVIDER_VERSION, description='Terraform provider version'
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default='INFO', description='Log level')
    file: Optional[str] = Field(default=None, description='Log file path')
    format: str = Field(
        default=DEFAULT_LOG_FORMAT,
        description='Log format',
    )

    @validator('level')
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()


class Config(BaseModel):
    """Main configuration class for Rollbar Terraform Importer."""

    rollbar: RollbarConfig = Field(..., description='Rollbar API settings')
    output: OutputConfig = Field(
        default_factory=OutputConfig, description='Output settings'
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description='Logging settings'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'forbid'  # Don't allow extra fields

    @classmethod
    def from_file(
        cls, config_path: str, overrides: Optional[Dict[str, Any]] = None
    ) -> 'Config':
        """Load configuration from YAML file."""
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f'Configuration file not found: {config_path}')

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        if overrides:
            config_data = cls._merge(config_data, overrides)

        return cls(**config_data)

    @classmethod
    def from_env(cls, overrides: Optional[Dict[str, Any]] = None) -> 'Config':
        """Load configuration from environment variables."""
        # Load .env file if it exists
        load_dotenv()

        single_file = os.getenv('OUTPUT_SINGLE_FILE')
        timeout = os.getenv('ROLLBAR_TIMEOUT')

        config_data = {
            'rollbar': {
                'access_token': os.getenv('ROLLBAR_ACCESS_TOKEN'),
                'api_url': os.getenv('ROLLBAR_API_URL'),
                'timeout': int(timeout) if timeout else None,
            },
            'output': {
                'directory': os.getenv('OUTPUT_DIR'),
                'single_file': single_file.lower() == 'true' if single_file else None,
                'provider_source': os.getenv('TERRAFORM_PROVIDER_SOURCE'),
                'provider_version': os.getenv('TERRAFORM_PROVIDER_VERSION'),
            },
            'logging': {
                'level': os.getenv('LOG_LEVEL', 'INFO'),
                'file': os.getenv('LOG_FILE'),
            },
        }

        # Remove None values
        config_data = cls._remove_none_values(config_data)

        if overrides:
            config_data = cls._merge(config_data, overrides)

        return cls(**config_data)

    @staticmethod
    def _remove_none_values(data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively remove None values from dictionary."""
        if isinstance(data, dict):
            return {
                k: Config._remove_none_values(v)
                for k, v in data.items()
                if v is not None
            }
        return data

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge ``overrides`` into ``base``, skipping None values."""
        merged = dict(base)
        for key, value in overrides.items():
            if value is None:
                continue
            if isinstance(value, dict):
                base_value = merged.get(key)
                if not isinstance(base_value, dict):
                    base_value = {}
                merged[key] = Config._merge(base_value, value)
            else:
                merged[key] = value
        return merged

    def to_file(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(
                self.dict(), f, default_flow_style=False, indent=2, sort_keys=False
            )

    @staticmethod
    def create_template(output_path: str) -> None:
        """Create a configuration template file."""
        template_config = {
            'rollbar': {
                'access_token': 'your-account-read-access-token',
                'api_url': DEFAULT_API_URL,
                'timeout': 30,
            },
            'output': {
                'directory': '.',
                'single_file': False,
                'provider_source': DEFAULT_PROVIDER_SOURCE,
                'provider_version': DEFAULT_PROVIDER_VERSION,
            },
            'logging': {
                'level': 'INFO',
                'file': 'rollbar-terraform.log',
                'format': DEFAULT_LOG_FORMAT,
            },
        }

        config_file = Path(output_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(
                template_config, f, default_flow_style=False, indent=2, sort_keys=False
            )
