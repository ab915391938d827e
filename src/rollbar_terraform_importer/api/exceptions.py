"""Rollbar API exceptions."""

from typing import Optional


class RollbarAPIError(Exception):
    """Base exception for Rollbar API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[dict] = None,
    ):
        """Initialize Rollbar API error.

        Args:
            message: Error message
            status_code: HTTP status code
            response_data: Response data from API
        """
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RollbarAuthenticationError(RollbarAPIError):
    """The access token was rejected or lacks the required scope."""

    pass


class RollbarRateLimitError(RollbarAPIError):
    """Rate limit exceeded error."""

    def __init__(self, message: str, retry_after: int = 60, **kwargs):
        """Initialize rate limit error.

        Args:
            message: Error message
            retry_after: Seconds the API asked us to wait
            **kwargs: Additional arguments for base class
        """
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class RollbarNotFoundError(RollbarAPIError):
    """Resource not found error."""

    pass


class RollbarResponseError(RollbarAPIError):
    """The API answered, but the envelope reported a failure."""

    pass
