"""헬스 체크 엔드포인트"""
from fastapi import APIRouter, Depends
from datetime import datetime

from websearch import __version__
from websearch.core.config import settings
from websearch.core.logging import logger
from websearch.engine import CacheAdapter
from websearch.schemas.search_schema import HealthResponse

from .search_routes import get_cache_adapter

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(cache_adapter: CacheAdapter = Depends(get_cache_adapter)):
    """
    헬스 체크 엔드포인트
    
    - 서버 상태
    - 캐시 백엔드(DB/Redis) 연결 상태
    
    캐시가 죽어도 검색은 동작하므로 degraded로 보고합니다.
    """
    cache_ok = cache_adapter.health_check()
    if not cache_ok:
        logger.warning(f"[API] Cache backend unhealthy: {settings.cache_backend}")
    
    return HealthResponse(
        status="ok" if cache_ok else "degraded",
        cache_backend=settings.cache_backend,
        timestamp=datetime.now(),
        version=__version__
    )
