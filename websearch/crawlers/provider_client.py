"""검색 프로바이더 클라이언트 (Primary / Fallback)

두 프로바이더는 동일한 fetch 연산을 제공하며,
엔드포인트/요청 구성/HTML 추출 규칙만 다릅니다.
상속 대신 ProviderKind → 규칙 테이블로 디스패치합니다.

호출 단위 상태: Idle → Requesting → (Parsing → Done) | Failed
프로바이더 내부 재시도는 없으며, 대체 프로바이더 재시도는 오케스트레이터 책임입니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from websearch.core.config import settings
from websearch.core.exceptions import ProviderUnavailableException
from websearch.core.logging import logger, sanitize_for_log
from websearch.schemas.search_schema import ProviderKind, SearchResult

from .http_client import SharedHttpClient, get_shared_http_client
from .providers import (
    build_duckduckgo_url,
    build_google_url,
    parse_duckduckgo_results,
    parse_google_results,
)


@dataclass(frozen=True)
class ProviderRules:
    """프로바이더별 요청 구성 + 추출 규칙"""

    build_url: Callable[[str, int], str]
    parse: Callable[[str, int], List[SearchResult]]


_RULES: Dict[ProviderKind, ProviderRules] = {
    ProviderKind.PRIMARY: ProviderRules(
        build_url=build_duckduckgo_url,
        parse=parse_duckduckgo_results,
    ),
    ProviderKind.FALLBACK: ProviderRules(
        build_url=build_google_url,
        parse=parse_google_results,
    ),
}


class ProviderClient:
    """외부 검색 엔진 1곳에서 HTML을 가져와 결과 목록을 추출합니다."""

    def __init__(
        self,
        kind: ProviderKind,
        http_client: Optional[SharedHttpClient] = None,
        timeout_s: Optional[float] = None,
    ):
        """
        Args:
            kind: 프로바이더 종류 (Primary | Fallback)
            http_client: 공유 HTTP 클라이언트 (없으면 프로세스 공유 인스턴스)
            timeout_s: 요청 타임아웃 (기본: settings.search_http_timeout_s)
        """
        if kind not in _RULES:
            raise ValueError(f"Unknown provider kind: {kind}")

        self.kind = kind
        self.rules = _RULES[kind]
        self.http_client = http_client or get_shared_http_client()
        self.timeout_s = timeout_s if timeout_s is not None else settings.search_http_timeout_s

    @property
    def name(self) -> str:
        return self.kind.value

    def build_url(self, query: str, max_results: int) -> str:
        return self.rules.build_url(query, max_results)

    async def fetch(self, query: str, max_results: int) -> List[SearchResult]:
        """검색 실행

        Args:
            query: 검색어
            max_results: 수집할 최대 결과 수

        Returns:
            List[SearchResult]: 문서 순서대로 최대 max_results개 (0개도 정상)

        Raises:
            ProviderUnavailableException: 전송 오류, 비정상 상태코드, 타임아웃, 차단, 파싱 오류
        """
        tag = f"[PROVIDER:{self.name}]"
        url = self.build_url(query, max_results)

        # Requesting
        try:
            logger.info(f"{tag} Fetching query='{sanitize_for_log(query)}' (timeout={self.timeout_s:.1f}s)")
            # 전송 계층 타임아웃과 별개로 하드 캡 (매달린 프로바이더가 오케스트레이터를 막지 않도록)
            status, html = await asyncio.wait_for(
                self.http_client.get_text(
                    url,
                    timeout_s=self.timeout_s,
                    headers={"User-Agent": settings.search_user_agent},
                ),
                timeout=self.timeout_s + 1.0,
            )
        except ProviderUnavailableException:
            raise
        except asyncio.TimeoutError as e:
            logger.warning(f"{tag} Timeout after {self.timeout_s:.1f}s")
            raise ProviderUnavailableException(self.name, "timeout") from e
        except Exception as e:
            logger.warning(f"{tag} Request failed: {type(e).__name__}: {e}")
            raise ProviderUnavailableException(self.name, f"request failed: {type(e).__name__}") from e

        if not 200 <= status < 300:
            logger.warning(f"{tag} Non-success status: {status}")
            raise ProviderUnavailableException(self.name, f"HTTP {status}", {"status": status})

        # Parsing
        try:
            results = self.rules.parse(html, max_results)
        except ProviderUnavailableException as e:
            logger.warning(f"{tag} {e.reason}")
            raise
        except Exception as e:
            logger.error(f"{tag} Parse failed: {type(e).__name__}: {e}")
            raise ProviderUnavailableException(self.name, f"parse failed: {type(e).__name__}") from e

        logger.info(f"{tag} Found {len(results)} results (len={len(html)})")
        return results


def create_default_providers(http_client: Optional[SharedHttpClient] = None) -> List[ProviderClient]:
    """우선순위 순서의 프로바이더 목록 (Primary → Fallback)."""
    return [
        ProviderClient(ProviderKind.PRIMARY, http_client=http_client),
        ProviderClient(ProviderKind.FALLBACK, http_client=http_client),
    ]
