"""Search Orchestrator - Main Engine Entry Point

검색 파이프라인을 조율합니다:
1. 검색어 정규화 (캐시 키)
2. Cache 조회
3. Primary 프로바이더
4. Fallback 프로바이더
5. Cache 저장

호출자에게는 항상 (비어 있을 수 있는) 목록을 반환하며 예외를 전파하지 않습니다.
"""

from datetime import timedelta
from time import perf_counter
from typing import List, Optional, Sequence

from websearch.core.config import settings
from websearch.core.exceptions import (
    AllProvidersExhaustedException,
    InvalidQueryException,
    ProviderUnavailableException,
    ValidationException,
)
from websearch.core.logging import logger, sanitize_for_log
from websearch.crawlers.provider_client import ProviderClient, create_default_providers
from websearch.schemas.search_schema import ProviderKind, SearchResult
from websearch.utils.text_utils import normalize_query

from .cache_adapter import CacheAdapter
from .result import ExecutionPath, SearchOutcome


_PATH_BY_KIND = {
    ProviderKind.PRIMARY: ExecutionPath.PRIMARY,
    ProviderKind.FALLBACK: ExecutionPath.FALLBACK,
}


class SearchOrchestrator:
    """검색 엔진 오케스트레이터

    Cache → Primary → Fallback 파이프라인을 관리합니다.

    - 캐시 히트는 저장된 그대로 반환 (max_results 재적용 없음)
    - max_results는 새로 가져오는 경우에만 적용
    - 프로바이더가 성공하면 결과가 0개여도 캐시에 저장
    - 모든 프로바이더 실패 시 빈 목록 (캐시 저장 없음)
    """

    def __init__(
        self,
        cache: CacheAdapter,
        providers: Optional[Sequence[ProviderClient]] = None,
        cache_ttl: Optional[timedelta] = None,
    ):
        """
        Args:
            cache: 캐시 어댑터 (get/set 메서드 구현)
            providers: 우선순위 순서의 프로바이더 (기본: Primary → Fallback)
            cache_ttl: 캐시 유효 기간 (기본: settings.cache_ttl, 24시간)
        """
        if not cache:
            raise ValueError("cache must not be None")

        self.cache = cache
        self.providers: List[ProviderClient] = list(providers) if providers is not None else create_default_providers()
        if not self.providers:
            raise ValueError("at least one provider is required")
        self.cache_ttl = cache_ttl or timedelta(seconds=settings.cache_ttl)

    async def search(self, query: str, max_results: Optional[int] = None) -> List[SearchResult]:
        """웹 검색 (공개 진입점)

        Args:
            query: 검색어
            max_results: 새로 가져올 최대 결과 수 (기본 5)

        Returns:
            List[SearchResult]: 결과 목록. 실패 시 빈 목록
        """
        outcome = await self.search_detailed(query, max_results)
        return outcome.results

    async def search_with_api(
        self,
        query: str,
        api_key: Optional[str] = None,
        max_results: Optional[int] = None,
    ) -> List[SearchResult]:
        """API 키 기반 검색 자리 (현재는 키 없는 검색과 동일하게 동작)"""
        if api_key:
            logger.info("[ORCHESTRATOR] API key search not implemented yet, falling back to free search")
        return await self.search(query, max_results)

    async def search_detailed(self, query: str, max_results: Optional[int] = None) -> SearchOutcome:
        """검색 실행 후 실행 경로/소요 시간까지 반환"""
        started = perf_counter()

        def _elapsed_ms() -> float:
            return (perf_counter() - started) * 1000

        if max_results is None:
            max_results = settings.search_default_max_results

        try:
            if not isinstance(query, str) or not query.strip():
                logger.warning(f"[ORCHESTRATOR] {InvalidQueryException('empty or non-text query')}")
                return SearchOutcome.empty(query=str(query or ""), elapsed_ms=_elapsed_ms())

            if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
                logger.warning(f"[ORCHESTRATOR] {ValidationException('max_results', f'must be >= 1, got {max_results!r}')}")
                return SearchOutcome.empty(query=query, elapsed_ms=_elapsed_ms())

            key = normalize_query(query)
            query_text = query.strip()
            logger.info(f"[ORCHESTRATOR] Search started: query='{sanitize_for_log(query_text)}', max_results={max_results}")

            # 1. Cache
            cached = await self.cache.get(key)
            if cached is not None:
                logger.info(f"[ORCHESTRATOR] Served from cache: {len(cached)} results")
                return SearchOutcome(
                    query=query,
                    results=cached,
                    path=ExecutionPath.CACHE,
                    elapsed_ms=_elapsed_ms(),
                )

            # 2. Providers (우선순위 순서)
            errors: List[str] = []
            for provider in self.providers:
                results = await self._try_provider(provider, query_text, max_results, errors)
                if results is None:
                    continue

                # 3. 반환 전에 캐시 저장 (0개 결과도 저장)
                await self.cache.set(key, results, self.cache_ttl)
                logger.info(
                    f"[ORCHESTRATOR] Search completed via {provider.name}: {len(results)} results"
                )
                return SearchOutcome(
                    query=query,
                    results=results,
                    path=_PATH_BY_KIND.get(provider.kind, ExecutionPath.PRIMARY),
                    elapsed_ms=_elapsed_ms(),
                    errors=errors,
                )

            # 4. 모든 프로바이더 실패 → 빈 결과 (fail-soft)
            exhausted = AllProvidersExhaustedException(sanitize_for_log(query_text), errors)
            logger.error(f"[ORCHESTRATOR] {exhausted}")
            return SearchOutcome.empty(query=query, elapsed_ms=_elapsed_ms(), errors=errors)

        except Exception as e:
            logger.error(f"[ORCHESTRATOR] Search failed: error={type(e).__name__}: {e}", exc_info=True)
            return SearchOutcome.empty(query=str(query or ""), elapsed_ms=_elapsed_ms(), errors=[str(e)])

    async def _try_provider(
        self,
        provider: ProviderClient,
        query: str,
        max_results: int,
        errors: List[str],
    ) -> Optional[List[SearchResult]]:
        """프로바이더 실행 시도

        Returns:
            성공 시 결과 목록 (0개 가능), 실패 시 None
        """
        try:
            return await provider.fetch(query, max_results)
        except ProviderUnavailableException as e:
            logger.warning(f"[ORCHESTRATOR] {provider.name} unavailable, trying next: {e}")
            errors.append(str(e))
        except Exception as e:
            logger.warning(f"[ORCHESTRATOR] {provider.name} failed: {type(e).__name__}: {e}")
            errors.append(f"{provider.name}: {type(e).__name__}: {e}")
        return None
