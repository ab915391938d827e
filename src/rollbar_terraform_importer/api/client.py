"""Rollbar API client implementation."""

from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests
from loguru import logger
from pydantic import BaseModel

from ..config.config import RollbarConfig
from ..models.envelope import APIEnvelope
from .exceptions import (
    RollbarAPIError,
    RollbarAuthenticationError,
    RollbarNotFoundError,
    RollbarRateLimitError,
    RollbarResponseError,
)

USER_AGENT = 'rollbar-terraform-importer/0.1.0'


class APIResponse(BaseModel):
    """Unwrapped API response."""

    status_code: int
    result: Any
    headers: Dict[str, str]


class RollbarClient:
    """Rollbar API client authenticated with an account access token."""

    def __init__(self, config: RollbarConfig):
        """Initialize Rollbar client.

        Args:
            config: Rollbar API configuration
        """
        self.config = config
        self.base_url = config.api_url.rstrip('/')
        self.session = requests.Session()

        if not config.access_token:
            raise RollbarAuthenticationError('No access token provided')

        self.session.headers.update(
            {
                'X-Rollbar-Access-Token': config.access_token,
                'Accept': 'application/json',
                'User-Agent': USER_AGENT,
            }
        )

        logger.info(f'Initialized Rollbar client for {self.base_url}')

    def _build_url(self, endpoint: str) -> str:
        """Build full API URL from endpoint.

        Args:
            endpoint: API endpoint path

        Returns:
            Full API URL
        """
        return urljoin(self.base_url + '/', endpoint.lstrip('/'))

    def _handle_response(self, response: requests.Response) -> APIResponse:
        """Check the HTTP status and unwrap the Rollbar envelope.

        Args:
            response: Raw HTTP response

        Returns:
            Response carrying the envelope's ``result``

        Raises:
            RollbarAPIError: For HTTP level failures
            RollbarResponseError: If the envelope reports ``err != 0``
        """
        headers = dict(response.headers)

        if response.status_code == 429:
            retry_after = headers.get('Retry-After', '')
            # Retry-After may also be an HTTP date
            retry_after = int(retry_after) if retry_after.isdigit() else 60
            raise RollbarRateLimitError(
                f'Rate limit exceeded. Retry after {retry_after} seconds',
                retry_after=retry_after,
                status_code=429,
            )

        if response.status_code in (401, 403):
            raise RollbarAuthenticationError(
                'Authentication failed', status_code=response.status_code
            )

        if response.status_code == 404:
            raise RollbarNotFoundError('Resource not found', status_code=404)

        if response.status_code >= 400:
            error_data = None
            try:
                error_data = response.json()
                message = error_data.get('message', f'HTTP {response.status_code}')
            except ValueError:
                message = f'HTTP {response.status_code}: {response.text}'

            raise RollbarAPIError(
                f'API request failed: {message}',
                status_code=response.status_code,
                response_data=error_data,
            )

        try:
            payload = response.json()
        except ValueError:
            raise RollbarResponseError(
                'Error parsing JSON response body',
                status_code=response.status_code,
            )

        if not isinstance(payload, dict) or 'err' not in payload:
            raise RollbarResponseError(
                'Unexpected response body: missing error code',
                status_code=response.status_code,
                response_data=payload if isinstance(payload, dict) else None,
            )

        envelope = APIEnvelope(**payload)
        if envelope.err != 0:
            raise RollbarResponseError(
                f'API returned an error: {envelope.message or envelope.result}',
                status_code=response.status_code,
                response_data=payload,
            )

        return APIResponse(
            status_code=response.status_code,
            result=envelope.result,
            headers=headers,
        )

    def get(
        self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs
    ) -> APIResponse:
        """Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters
            **kwargs: Additional request arguments

        Returns:
            API response
        """
        url = self._build_url(endpoint)
        logger.debug(f'GET {url}')

        try:
            response = self.session.get(
                url, params=params, timeout=self.config.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f'Network error during GET request: {e}')
            raise RollbarAPIError(f'Network error: {e}')

        return self._handle_response(response)

    def test_connection(self) -> bool:
        """Test that the access token can read the account.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            self.get('projects')
            return True
        except RollbarAPIError as e:
            logger.error(f'Connection test failed: {e}')
            return False

    def close(self):
        """Close the client session."""
        self.session.close()
        logger.debug('Rollbar client session closed')

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
