"""Custom exceptions for bibfetchers."""


class BibfetchersError(Exception):
    """Base exception for all bibfetchers errors."""

    exit_code: int = 1
    default_hint: str | None = None

    def __init__(
        self,
        message: str,
        details: str | None = None,
        hint: str | None = None,
    ):
        self.message = message
        self.details = details
        self.hint = hint or self.default_hint
        super().__init__(message)


# Fetcher errors (10-19)
class FetchError(BibfetchersError):
    """Error raised by a fetcher while talking to its source."""

    exit_code = 10


class EntryNotFoundError(FetchError):
    """Nothing matched the request at the source."""

    exit_code = 11
    default_hint = "Check the identifier format (e.g., 10.1234/... for DOI, 2301.00001 for arXiv)"


class RateLimitError(FetchError):
    """Rate limited by source."""

    exit_code = 12
    default_hint = "Wait a few minutes and try again"


class NetworkError(FetchError):
    """Network connectivity issue."""

    exit_code = 13
    default_hint = "Check your internet connection"


# Configuration errors (30-39)
class ConfigError(BibfetchersError):
    """Configuration error."""

    exit_code = 30


class MissingAPIKeyError(ConfigError):
    """A fetcher needs an API key that is not configured."""

    exit_code = 31
    default_hint = "Set BIBFETCHERS_API_KEYS__<SOURCE> or configure api_keys in ~/.bibfetchers/config.yaml"


# Dispatch errors (60-69)
class DispatchError(BibfetchersError):
    """A caller asked the registry for something it cannot dispatch."""

    exit_code = 60


class UnsupportedIdentifierTypeError(DispatchError, ValueError):
    """No identifier fetcher exists for the requested identifier type."""

    exit_code = 61

    def __init__(self, identifier_type: object):
        self.identifier_type = identifier_type
        super().__init__(
            f"No fetcher found for identifier type: {identifier_type}",
            details="Identifier fetchers are only registered for DOI.",
        )


class UnknownFetcherError(DispatchError):
    """No fetcher with the requested name exists in a category."""

    exit_code = 62
    default_hint = "Run 'bibfetchers fetchers' to list available fetchers"
