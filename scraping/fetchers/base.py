"""Page fetcher abstraction and session scoping."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol, TypeVar, runtime_checkable

from scraping.errors import SessionError
from scraping.utils.logging import get_logger

SessionT = TypeVar("SessionT")

logger = get_logger(__name__)


@runtime_checkable
class PageFetcher(Protocol[SessionT]):
    async def acquire_session(self) -> SessionT: ...

    async def load_page(self, session: SessionT, url: str) -> str: ...

    async def release_session(self, session: SessionT) -> None: ...


@asynccontextmanager
async def session_scope(fetcher: PageFetcher[SessionT]) -> AsyncIterator[SessionT]:
    """Acquire a fetch session and release it exactly once on every exit path."""
    try:
        session = await fetcher.acquire_session()
    except SessionError:
        raise
    except Exception as exc:
        raise SessionError(f"세션 생성 실패: {exc}") from exc
    try:
        yield session
    finally:
        try:
            await fetcher.release_session(session)
        except Exception:  # pragma: no cover - keep the body exception
            logger.exception("fetch.session_release_failed")
