"""Exceptions raised by the match scorer and its completion client."""


class ScorerError(Exception):
    """Base exception for match scoring errors."""

    pass


class ScorerConfigurationError(ScorerError):
    """Raised when the scorer cannot be built from the given settings."""

    pass


class CompletionError(ScorerError):
    """Raised when a completion call fails or returns no usable content."""

    pass
