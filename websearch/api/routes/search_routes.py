"""Search Routes (Engine Layer)

HTTP Layer가 Engine Layer로 요청을 위임하는 단순한 Translator 역할만 수행합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from websearch.core.logging import logger
from websearch.engine import CacheAdapter, SearchOrchestrator
from websearch.schemas.search_schema import SearchRequest, SearchResponse

router = APIRouter(prefix="/api/v1", tags=["search"])

# 싱글톤 서비스
_cache_adapter: Optional[CacheAdapter] = None
_orchestrator: Optional[SearchOrchestrator] = None


def get_cache_adapter() -> CacheAdapter:
    """CacheAdapter 싱글톤 (settings.cache_backend에 따른 구현)"""
    global _cache_adapter
    if _cache_adapter is None:
        _cache_adapter = CacheAdapter()
    return _cache_adapter


def get_orchestrator(
    cache_adapter: CacheAdapter = Depends(get_cache_adapter),
) -> SearchOrchestrator:
    """SearchOrchestrator 싱글톤

    Engine Layer의 진입점을 제공합니다.
    """
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = SearchOrchestrator(cache=cache_adapter)
    return _orchestrator


@router.post("/search", response_model=SearchResponse)
async def search_web(
    request: SearchRequest,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """웹 검색 API

    HTTP → Engine → Cache/Primary/Fallback 파이프라인으로 실행

    프로바이더가 모두 실패해도 빈 목록과 함께 success를 반환합니다.
    """
    logger.info(f"[API] Search request: query (length: {len(request.query)})")

    outcome = await orchestrator.search_detailed(request.query, request.max_results)

    if outcome.results:
        message = f"{len(outcome.results)}건의 검색 결과를 찾았습니다"
    else:
        message = "검색 결과가 없습니다"

    return SearchResponse(
        status="success",
        data=outcome.results,
        source=outcome.path.value,
        elapsed_ms=round(outcome.elapsed_ms, 2),
        message=message,
    )
