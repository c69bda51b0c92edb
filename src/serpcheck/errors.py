"""Exceptions raised inside serpcheck.

None of these cross the searcher boundary as raw exceptions: searchers map
them onto ``SearchResult.status``.
"""


class SerpcheckError(Exception):
    """Base exception for all serpcheck errors."""


class ConfigurationError(SerpcheckError, ValueError):
    """Missing or invalid configuration (API credentials, store file, ...)."""


class SearchCancelledError(SerpcheckError):
    """Raised at a suspension point once cancellation has been requested."""

    def __init__(self, message: str = "search cancelled") -> None:
        super().__init__(message)
