"""Rollbar REST API access."""

from .client import APIResponse, RollbarClient
from .exceptions import (
    RollbarAPIError,
    RollbarAuthenticationError,
    RollbarNotFoundError,
    RollbarRateLimitError,
    RollbarResponseError,
)
from .fetcher import AccountFetcher

__all__ = [
    'APIResponse',
    'RollbarClient',
    'AccountFetcher',
    'RollbarAPIError',
    'RollbarAuthenticationError',
    'RollbarNotFoundError',
    'RollbarRateLimitError',
    'RollbarResponseError',
]
