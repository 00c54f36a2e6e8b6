"""News scraping package bootstrap."""

from .settings import NewsSource, Settings, SourceSelectors, get_settings, reset_settings_cache  # noqa: F401

__all__ = [
    "NewsSource",
    "Settings",
    "SourceSelectors",
    "get_settings",
    "reset_settings_cache",
]
