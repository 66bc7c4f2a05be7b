"""Cache Adapter - 캐시 실패를 소프트 실패로 변환"""

from datetime import timedelta
from typing import List, Optional, Sequence

from websearch.core.exceptions import CacheException
from websearch.core.logging import logger
from websearch.schemas.search_schema import SearchResult
from websearch.services.impl.cache_service import ResultCache, create_result_cache


class CacheAdapter:
    """ResultCache 어댑터

    SearchOrchestrator가 기대하는 인터페이스로 변환합니다.
    - 읽기 실패 → 캐시 미스(None)
    - 쓰기 실패 → 로그만 남기고 무시
    """

    def __init__(self, cache: Optional[ResultCache] = None):
        """
        Args:
            cache: ResultCache 구현 (없으면 설정에 따라 생성)
        """
        self.cache = cache if cache is not None else create_result_cache()

    async def get(self, key: str) -> Optional[List[SearchResult]]:
        """캐시 조회

        Args:
            key: 정규화된 검색어

        Returns:
            저장된 결과 목록 (저장된 그대로) 또는 None

        Raises:
            None: 모든 예외는 로깅되고 None 반환
        """
        try:
            hit = await self.cache.get(key)
            if hit is None:
                return None
            results, _expires_at = hit
            return list(results)

        except CacheException as e:
            logger.warning(f"[CACHE] Get failed, treating as miss: {e}")
            return None
        except Exception as e:
            logger.warning(f"[CACHE] Get failed: {type(e).__name__}: {e}")
            return None

    async def set(self, key: str, results: Sequence[SearchResult], ttl: timedelta) -> bool:
        """캐시 저장

        Returns:
            성공 여부

        Raises:
            None: 모든 예외는 로깅됨
        """
        try:
            await self.cache.put(key, results, ttl)
            return True

        except CacheException as e:
            logger.warning(f"[CACHE] Set failed, ignored: {e}")
            return False
        except Exception as e:
            logger.warning(f"[CACHE] Set failed: {type(e).__name__}: {e}")
            return False

    def health_check(self) -> bool:
        try:
            return bool(self.cache.health_check())
        except Exception as e:
            logger.warning(f"[CACHE] Health check failed: {type(e).__name__}: {e}")
            return False
