"""공유 HTTP 클라이언트 (curl_cffi)

프로세스 단위로 AsyncSession 하나를 재사용합니다.
브라우저 TLS 지문(impersonate)과 브라우저형 헤더로 요청하며, 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Dict, Optional

from curl_cffi.requests import AsyncSession

from websearch.core.config import settings
from websearch.core.logging import logger


class SharedHttpClient:
    """지연 생성되는 공유 AsyncSession 래퍼"""

    def __init__(
        self,
        impersonate: Optional[str] = None,
        max_clients: Optional[int] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.impersonate = impersonate or settings.search_http_impersonate
        self.max_clients = max_clients or settings.search_http_max_clients
        self.user_agent = user_agent or settings.search_user_agent
        # 세션과 락은 생성한 이벤트 루프에 묶임 (루프가 바뀌면 다시 생성)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._lock: Optional[asyncio.Lock] = None
        self._session: Optional[AsyncSession] = None

    @property
    def is_open(self) -> bool:
        return self._session is not None

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def _bind_loop(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._loop is not loop or self._lock is None:
            if self._session is not None:
                # 이전 루프는 이미 닫혔거나 다른 스레드 소유: 세션은 재사용/종료 불가
                logger.info("[HTTP_CLIENT] Event loop changed, recreating session")
            self._session = None
            self._lock = asyncio.Lock()
            self._loop = loop
        return self._lock

    async def _get_session(self) -> AsyncSession:
        async with self._bind_loop():
            if self._session is None:
                self._session = AsyncSession(
                    impersonate=self.impersonate,
                    headers=self.default_headers(),
                    allow_redirects=True,
                    max_clients=self.max_clients,
                    trust_env=False,
                )
                logger.debug(f"[HTTP_CLIENT] Session opened (impersonate={self.impersonate})")
            return self._session

    async def get_text(
        self,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
        follow_redirects: bool = True,
    ) -> tuple[int, str]:
        """GET 요청 후 (status, body) 반환

        상태 코드 판단은 호출자 몫입니다.

        Raises:
            Exception: 전송 오류/타임아웃 (curl_cffi RequestsError 등)
        """
        session = await self._get_session()
        started = perf_counter()
        try:
            resp = await session.get(
                url,
                headers=headers,
                timeout=timeout_s,
                allow_redirects=follow_redirects,
            )
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] GET failed after {perf_counter() - started:.2f}s: {type(e).__name__}: {e}")
            raise

        status = resp.status_code or 0
        body = resp.text or ""
        logger.debug(f"[HTTP_CLIENT] GET {status} ({len(body)} bytes, {perf_counter() - started:.2f}s)")
        return status, body

    async def close(self) -> None:
        if self._session is None:
            return
        async with self._bind_loop():
            if self._session is None:
                return
            session, self._session = self._session, None
            try:
                await session.close()
            except Exception as e:
                logger.warning(f"[HTTP_CLIENT] Session close failed: {type(e).__name__}: {e}")


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
