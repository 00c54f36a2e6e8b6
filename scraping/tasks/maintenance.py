"""Periodic maintenance tasks."""

from __future__ import annotations

import time
from typing import Any, Dict

from celery import shared_task

from scraping.settings import get_settings
from scraping.utils.logging import get_logger

_STARTED_AT = time.monotonic()


def health_snapshot() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "uptime_seconds": round(time.monotonic() - _STARTED_AT, 1),
        "enabled_sources": [source.id for source in settings.enabled_sources()],
    }


@shared_task(name="scraping.tasks.maintenance.health_check")
def health_check() -> Dict[str, Any]:
    snapshot = health_snapshot()
    get_logger(__name__).info("health_check", extra=snapshot)
    return snapshot
