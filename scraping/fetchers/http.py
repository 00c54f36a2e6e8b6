"""httpx-backed page fetcher (transport-injected for tests/offline)."""

from __future__ import annotations

import asyncio
from typing import Optional, Set

import httpx

from scraping.errors import FetchError, SessionError, TransientFetchError
from scraping.settings import Settings, get_settings
from scraping.utils.logging import get_logger

logger = get_logger(__name__)


class HttpPageFetcher:
    """Fetch HTML pages with one ``httpx.AsyncClient`` per job session.

    - transport 주입 시: 오프라인 모드 (테스트)
    - transport 미주입 시: 실제 HTTP 호출
    """

    def __init__(self, settings: Settings | None = None, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._settings = settings or get_settings()
        self._transport = transport
        self._open: Set[httpx.AsyncClient] = set()

    async def acquire_session(self) -> httpx.AsyncClient:
        cfg = self._settings
        try:
            client = httpx.AsyncClient(
                headers={
                    "User-Agent": cfg.user_agent,
                    "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
                    "Accept-Language": "ko-KR,ko;q=0.9,en;q=0.8",
                },
                timeout=httpx.Timeout(cfg.timeout_seconds),
                follow_redirects=True,
                transport=self._transport,
            )
        except Exception as exc:
            raise SessionError(f"HTTP 세션 생성 실패: {exc}") from exc
        self._open.add(client)
        return client

    async def release_session(self, session: httpx.AsyncClient) -> None:
        if session not in self._open:
            return
        self._open.discard(session)
        await session.aclose()

    async def aclose(self) -> None:
        """Force-release every live session (process shutdown)."""
        for client in list(self._open):
            await self.release_session(client)

    @property
    def open_sessions(self) -> int:
        return len(self._open)

    async def load_page(self, session: httpx.AsyncClient, url: str) -> str:
        max_attempts = int(self._settings.retry_attempts)
        attempts = 0
        while True:
            attempts += 1
            try:
                return await asyncio.wait_for(self._get(session, url), timeout=self._settings.timeout_seconds)
            except asyncio.TimeoutError as exc:
                if attempts >= max_attempts:
                    raise TransientFetchError(f"페이지 로드 타임아웃: {url}") from exc
                reason = "timeout"
            except TransientFetchError as exc:  # retry
                if attempts >= max_attempts:
                    raise
                reason = str(exc)
            logger.info("fetch.retry", extra={"url": url, "attempt": attempts, "reason": reason})

    async def _get(self, session: httpx.AsyncClient, url: str) -> str:
        try:
            resp = await session.get(url)
        except httpx.TimeoutException as exc:
            raise TransientFetchError(f"페이지 로드 타임아웃: {url}") from exc
        except httpx.TransportError as exc:
            raise TransientFetchError(f"페이지 로드 오류: {url} ({exc.__class__.__name__})") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"페이지 요청 실패: {url} ({exc.__class__.__name__})") from exc

        if resp.status_code == 429 or resp.status_code >= 500:
            raise TransientFetchError(f"페이지 일시 오류: {resp.status_code}")
        if resp.status_code >= 400:
            raise FetchError(f"페이지 응답 오류: {resp.status_code}")
        return resp.text
