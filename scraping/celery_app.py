"""Celery 애플리케이션 부트스트랩."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict

from celery import Celery
from celery.schedules import schedule as celery_schedule

from .settings import NewsSource, Settings, get_settings
from .utils.logging import configure_logging

_CELERY_APP: Celery | None = None


def create_celery_app(settings: Settings | None = None) -> Celery:
    """설정을 기반으로 Celery 인스턴스를 생성한다."""
    config = settings or get_settings()
    configure_logging(config.log_level, json_enabled=config.log_json)

    app = Celery("scraping", broker=config.redis_url, backend=config.redis_url)
    app.conf.update(
        task_default_queue="scraping.default",
        task_default_exchange="scraping",
        task_default_routing_key="scraping.default",
        # one job at a time keeps load on remote hosts bounded
        worker_concurrency=1,
        beat_schedule=_build_beat_schedule(config),
        timezone="Asia/Seoul",
        enable_utc=True,
        worker_send_task_events=True,
        task_send_sent_event=True,
    )

    app.autodiscover_tasks(["scraping.tasks"])
    _install_signal_handlers(app)
    return app


def get_celery_app() -> Celery:
    """싱글톤 Celery 인스턴스를 반환한다."""
    global _CELERY_APP
    if _CELERY_APP is None:
        _CELERY_APP = create_celery_app()
    return _CELERY_APP


def _build_beat_schedule(settings: Settings) -> Dict[str, Dict[str, Any]]:
    schedule: Dict[str, Dict[str, Any]] = {}
    for index, source in enumerate(settings.sources):
        if not source.enabled:
            continue
        schedule[_build_schedule_name(source, index)] = {
            "task": "scraping.tasks.scrape.scrape_source",
            "schedule": celery_schedule(timedelta(minutes=source.scrape_interval_minutes)),
            "args": (source.id,),
            "options": {"queue": "scraping.collect"},
        }
    schedule["maintenance.health_check"] = {
        "task": "scraping.tasks.maintenance.health_check",
        "schedule": celery_schedule(timedelta(minutes=settings.health_check_interval_minutes)),
        "options": {"queue": "scraping.default"},
    }
    return schedule


def _build_schedule_name(source: NewsSource, index: int) -> str:
    return f"scrape.{source.id}.{index}"


def _install_signal_handlers(app: Celery) -> None:
    from celery import signals

    logger = logging.getLogger("scraping.worker")

    @signals.worker_shutdown.connect  # type: ignore[attr-defined]
    def _on_worker_shutdown(sender=None, **kwargs):  # noqa: ANN001
        logger.info("Celery worker shutdown detected", extra={"sender": str(sender)})
