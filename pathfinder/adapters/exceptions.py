"""Custom exceptions for job provider adapters."""


class AdapterError(Exception):
    """Base exception for all adapter errors.

    The aggregator catches this per provider: a failing provider contributes
    zero jobs and never aborts the aggregate search.
    """

    pass


class AdapterHTTPError(AdapterError):
    """The provider answered with a 4xx/5xx status, or the connection failed.

    ``status_code`` is 0 when no response was received.
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """The provider did not answer within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """The provider answered but the payload could not be parsed."""

    pass


class AdapterConfigurationError(AdapterError):
    """The adapter was constructed with invalid settings."""

    pass
