"""Error taxonomy for the scraping pipeline."""

from __future__ import annotations


class ScrapingError(Exception):
    """Base scraping error."""


class ConfigurationError(ScrapingError):
    """Unknown or unusable source configuration (fatal at selection time)."""


class SessionError(ScrapingError):
    """Fetch session could not be acquired (fatal for the job)."""


class FetchError(ScrapingError):
    """A page could not be loaded (network, timeout, HTTP status)."""


class TransientFetchError(FetchError):
    """Retryable load failure (timeout, 429, 5xx)."""


class ListingFetchError(ScrapingError):
    """The listing page could not be loaded (fatal for the job)."""


class ExtractionError(ScrapingError):
    """The document could not be parsed at all."""
