"""Logging utilities for Rollbar Terraform Importer."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_COMPONENT = 'importer'


def setup_logging(
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """Setup logging configuration using loguru.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        log_format: Optional custom log format
    """
    # Remove default handler
    logger.remove()
    # Records not bound to a component still need one for the format
    logger.configure(extra={'component': DEFAULT_COMPONENT})

    if log_format is None:
        log_format = (
            '<green>{time:YYYY-MM-DD HH:mm:ss}</green> | '
            '<level>{level: <8}</level> | '
            '<magenta>{extra[component]}</magenta> | '
            '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | '
            '<level>{message}</level>'
        )

    logger.add(
        sys.stderr,
        format=log_format,
        level=level,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # File format (no colors)
        file_format = (
            '{time:YYYY-MM-DD HH:mm:ss} | '
            '{level: <8} | '
            '{extra[component]} | '
            '{name}:{function}:{line} | '
            '{message}'
        )

        logger.add(
            log_file,
            format=file_format,
            level=level,
            rotation='10 MB',
            retention='30 days',
            compression='gz',
            backtrace=True,
            diagnose=False,
        )

    logger.debug(f'Logging initialized with level: {level}')
    if log_file:
        logger.info(f'Log file: {log_file}')
