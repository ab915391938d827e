"""Configuration models and loaders."""

from .config import Config, LoggingConfig, OutputConfig, RollbarConfig

__all__ = ['Config', 'LoggingConfig', 'OutputConfig', 'RollbarConfig']
