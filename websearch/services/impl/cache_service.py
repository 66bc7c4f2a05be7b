"""검색 결과 캐시 서비스 - 캐싱 로직만 담당

정규화된 검색어 → (결과 목록, 만료 시각) 저장소.
- 만료는 읽기 시점에만 검사하며, 만료된 엔트리는 그 읽기에서 삭제합니다.
- 쓰기는 upsert (기존 결과와 병합하지 않고 통째로 교체).
- 크기 기반 제거/LRU 없음.
"""
import asyncio
import json
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from pydantic import ValidationError
from redis import Redis
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from websearch.core.config import settings
from websearch.core.database import SessionLocal, get_db_context
from websearch.core.logging import logger
from websearch.core.exceptions import (
    CacheSerializationException,
    CacheUnavailableException,
)
from websearch.repositories.impl.search_cache_repository import SearchCacheRepository
from websearch.schemas.search_schema import CachedSearch, SearchResult
from websearch.utils.hash_utils import generate_cache_key
from websearch.utils.time_utils import utcnow


CacheHit = Tuple[List[SearchResult], datetime]


class ResultCache(Protocol):
    """검색 결과 캐시 인터페이스

    DatabaseResultCache/RedisResultCache가 구현해야 할 프로토콜입니다.
    """

    async def get(self, key: str) -> Optional[CacheHit]:
        """만료되지 않은 엔트리 조회 (만료 시 삭제 후 None)"""
        ...

    async def put(self, key: str, results: Sequence[SearchResult], ttl: timedelta) -> None:
        """엔트리 생성 또는 전체 교체"""
        ...

    def health_check(self) -> bool:
        ...


def _dump_results(results: Sequence[SearchResult]) -> str:
    try:
        return json.dumps(
            [r.model_dump(mode="json") for r in results],
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to serialize cache data: {e}")
        raise CacheSerializationException("serialize", str(e))


def _load_results(payload: str) -> List[SearchResult]:
    try:
        data = json.loads(payload)
        return [SearchResult(**item) for item in data]
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        logger.error(f"Failed to deserialize cache: {e}")
        raise CacheSerializationException("deserialize", str(e))


class DatabaseResultCache:
    """DB(SQLAlchemy) 기반 영속 캐시

    세션 작업은 블로킹이므로 asyncio.to_thread로 실행합니다.
    각 get/put은 독립 트랜잭션이라 키별 upsert가 원자적입니다.
    """

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Args:
            session_factory: 세션 팩토리 (기본: SessionLocal)
            clock: 현재 시각 함수 (UTC naive, 테스트에서 교체)
        """
        self.session_factory = session_factory or SessionLocal
        self.clock = clock

    def _get_sync(self, key: str) -> Optional[CacheHit]:
        with get_db_context(self.session_factory) as db:
            repo = SearchCacheRepository(db)
            row = repo.find(key)
            if row is None:
                logger.info(f"[CACHE] Miss for key: {key}")
                return None

            if row.expires_at <= self.clock():
                logger.info(f"[CACHE] Expired entry deleted for key: {key}")
                repo.delete(row)
                return None

            results = _load_results(row.results_json)
            logger.info(f"[CACHE] Hit for key: {key} ({len(results)} results)")
            return results, row.expires_at

    def _put_sync(self, key: str, payload: str, expires_at: datetime) -> None:
        with get_db_context(self.session_factory) as db:
            SearchCacheRepository(db).upsert(key, payload, expires_at)
        logger.info(f"[CACHE] Set for key: {key}, expires_at: {expires_at.isoformat()}")

    async def get(self, key: str) -> Optional[CacheHit]:
        """캐시 조회

        Raises:
            CacheSerializationException: 저장된 payload 손상
            CacheUnavailableException: DB 오류
        """
        try:
            return await asyncio.to_thread(self._get_sync, key)
        except CacheSerializationException:
            raise
        except Exception as e:
            logger.error(f"[CACHE] Read error: {type(e).__name__}: {e}")
            raise CacheUnavailableException("read", str(e))

    async def put(self, key: str, results: Sequence[SearchResult], ttl: timedelta) -> None:
        """캐시 저장 (upsert)

        Raises:
            CacheSerializationException: 직렬화 실패
            CacheUnavailableException: DB 오류
        """
        payload = _dump_results(results)
        expires_at = self.clock() + ttl
        try:
            await asyncio.to_thread(self._put_sync, key, payload, expires_at)
        except Exception as e:
            logger.error(f"[CACHE] Write error: {type(e).__name__}: {e}")
            raise CacheUnavailableException("write", str(e))

    def health_check(self) -> bool:
        """DB 연결 상태 확인"""
        try:
            with get_db_context(self.session_factory) as db:
                db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"[CACHE] Database health check failed: {e}")
            return False


class RedisResultCache:
    """Redis 기반 캐시

    SET EX 한 번으로 저장해 키별 쓰기가 원자적입니다.
    Redis TTL과 별개로 payload의 expires_at을 읽기 시점에 검사합니다.
    """

    def __init__(
        self,
        redis_client: Optional[Redis] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Redis 클라이언트 초기화"""
        self.clock = clock
        if redis_client is not None:
            self.redis_client = redis_client
            return

        try:
            self.redis_client = Redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            # 연결 테스트
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise CacheUnavailableException("connect", str(e))

    def _get_sync(self, key: str) -> Optional[CacheHit]:
        cache_key = generate_cache_key(key)
        cached_data = self.redis_client.get(cache_key)
        if not cached_data:
            logger.info(f"[CACHE] Miss for key: {cache_key}")
            return None

        try:
            entry = CachedSearch.model_validate_json(cached_data)
        except ValidationError as e:
            logger.error(f"Failed to deserialize cache: {e}")
            raise CacheSerializationException("deserialize", str(e))

        if entry.expires_at <= self.clock():
            self.redis_client.delete(cache_key)
            logger.info(f"[CACHE] Expired entry deleted for key: {cache_key}")
            return None

        logger.info(f"[CACHE] Hit for key: {cache_key} ({len(entry.results)} results)")
        return list(entry.results), entry.expires_at

    def _put_sync(self, key: str, results: Sequence[SearchResult], ttl: timedelta) -> None:
        cache_key = generate_cache_key(key)
        entry = CachedSearch(query=key, results=list(results), expires_at=self.clock() + ttl)
        try:
            cached_value = entry.model_dump_json()
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize cache data: {e}")
            raise CacheSerializationException("serialize", str(e))

        self.redis_client.set(cache_key, cached_value, ex=max(1, int(ttl.total_seconds())))
        logger.info(f"[CACHE] Set for key: {cache_key}, TTL: {int(ttl.total_seconds())}s")

    async def get(self, key: str) -> Optional[CacheHit]:
        try:
            return await asyncio.to_thread(self._get_sync, key)
        except CacheSerializationException:
            raise
        except Exception as e:
            logger.error(f"[CACHE] Read error: {type(e).__name__}: {e}")
            raise CacheUnavailableException("read", str(e))

    async def put(self, key: str, results: Sequence[SearchResult], ttl: timedelta) -> None:
        try:
            await asyncio.to_thread(self._put_sync, key, results, ttl)
        except CacheSerializationException:
            raise
        except Exception as e:
            logger.error(f"[CACHE] Write error: {type(e).__name__}: {e}")
            raise CacheUnavailableException("write", str(e))

    def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            self.redis_client.ping()
            return True
        except Exception:
            return False


def create_result_cache() -> ResultCache:
    """settings.cache_backend에 맞는 캐시 구현 생성"""
    if settings.cache_backend == "redis":
        return RedisResultCache()
    return DatabaseResultCache()
