"""캐시 서비스 유닛 테스트 (SQLite 인메모리 / Redis Mock)"""
import json
from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest

from websearch.core.exceptions import CacheSerializationException, CacheUnavailableException
from websearch.repositories.models import SearchCache
from websearch.schemas.search_schema import CachedSearch, ProviderKind
from websearch.services.impl.cache_service import DatabaseResultCache, RedisResultCache
from websearch.utils.hash_utils import generate_cache_key
from tests.conftest import FakeClock, make_results


TTL = timedelta(hours=24)


class TestDatabaseResultCache:
    """DB 영속 캐시"""

    @pytest.mark.asyncio
    async def test_put_then_get(self, sqlite_session_factory):
        clock = FakeClock()
        cache = DatabaseResultCache(session_factory=sqlite_session_factory, clock=clock)
        results = make_results(ProviderKind.PRIMARY, 3)

        await cache.put("rust", results, TTL)
        hit = await cache.get("rust")

        assert hit is not None
        stored, expires_at = hit
        assert stored == results
        assert expires_at == clock() + TTL

    @pytest.mark.asyncio
    async def test_miss(self, sqlite_session_factory):
        cache = DatabaseResultCache(session_factory=sqlite_session_factory, clock=FakeClock())

        assert await cache.get("unknown") is None

    @pytest.mark.asyncio
    async def test_upsert_replaces_without_merge(self, sqlite_session_factory):
        cache = DatabaseResultCache(session_factory=sqlite_session_factory, clock=FakeClock())

        await cache.put("rust", make_results(ProviderKind.PRIMARY, 3, prefix="old"), TTL)
        await cache.put("rust", make_results(ProviderKind.FALLBACK, 1, prefix="new"), TTL)
        stored, _ = await cache.get("rust")

        assert [r.title for r in stored] == ["new 1"]
        with sqlite_session_factory() as db:
            assert db.query(SearchCache).count() == 1

    @pytest.mark.asyncio
    async def test_empty_result_set_is_cached(self, sqlite_session_factory):
        cache = DatabaseResultCache(session_factory=sqlite_session_factory, clock=FakeClock())

        await cache.put("nothing", [], TTL)

        assert await cache.get("nothing") == ([], FakeClock()() + TTL)

    @pytest.mark.asyncio
    async def test_expired_entry_deleted_on_read(self, sqlite_session_factory):
        """expires_at 시각 '이후 또는 같은' 읽기는 부재로 처리하고 행 삭제"""
        clock = FakeClock()
        cache = DatabaseResultCache(session_factory=sqlite_session_factory, clock=clock)
        await cache.put("rust", make_results(ProviderKind.PRIMARY, 2), timedelta(seconds=60))

        clock.advance(seconds=59)
        assert await cache.get("rust") is not None

        clock.advance(seconds=1)
        assert await cache.get("rust") is None
        with sqlite_session_factory() as db:
            assert db.query(SearchCache).filter(SearchCache.query == "rust").first() is None

    @pytest.mark.asyncio
    async def test_corrupted_payload_raises_serialization(self, sqlite_session_factory):
        clock = FakeClock()
        with sqlite_session_factory() as db:
            db.add(SearchCache(query="bad", results_json="{not json", expires_at=clock() + TTL))
            db.commit()
        cache = DatabaseResultCache(session_factory=sqlite_session_factory, clock=clock)

        with pytest.raises(CacheSerializationException):
            await cache.get("bad")

    @pytest.mark.asyncio
    async def test_database_error_raises_unavailable(self):
        broken_factory = MagicMock(side_effect=RuntimeError("db down"))
        cache = DatabaseResultCache(session_factory=broken_factory, clock=FakeClock())

        with pytest.raises(CacheUnavailableException):
            await cache.get("rust")
        with pytest.raises(CacheUnavailableException):
            await cache.put("rust", [], TTL)

    def test_health_check(self, sqlite_session_factory):
        assert DatabaseResultCache(session_factory=sqlite_session_factory).health_check() is True
        assert DatabaseResultCache(session_factory=MagicMock(side_effect=RuntimeError())).health_check() is False


class TestRedisResultCache:
    """Redis 캐시 (클라이언트 Mock)"""

    @patch('websearch.services.impl.cache_service.Redis')
    def test_init_failure(self, mock_redis):
        """Redis 연결 실패"""
        mock_redis.from_url.return_value.ping.side_effect = Exception("Connection failed")

        with pytest.raises(CacheUnavailableException):
            RedisResultCache()

    @pytest.mark.asyncio
    async def test_put_uses_single_set_with_ttl(self):
        client = MagicMock()
        clock = FakeClock()
        cache = RedisResultCache(redis_client=client, clock=clock)

        await cache.put("rust", make_results(ProviderKind.PRIMARY, 2), TTL)

        client.set.assert_called_once()
        args, kwargs = client.set.call_args
        assert args[0] == generate_cache_key("rust")
        assert kwargs["ex"] == 86400
        payload = json.loads(args[1])
        assert payload["query"] == "rust"
        assert len(payload["results"]) == 2

    @pytest.mark.asyncio
    async def test_get_hit(self):
        clock = FakeClock()
        entry = CachedSearch(query="rust", results=make_results(ProviderKind.FALLBACK, 1), expires_at=clock() + TTL)
        client = MagicMock()
        client.get.return_value = entry.model_dump_json()
        cache = RedisResultCache(redis_client=client, clock=clock)

        hit = await cache.get("rust")

        assert hit is not None
        assert hit[0][0].source == ProviderKind.FALLBACK
        client.get.assert_called_once_with(generate_cache_key("rust"))

    @pytest.mark.asyncio
    async def test_get_expired_deletes(self):
        clock = FakeClock()
        entry = CachedSearch(query="rust", results=[], expires_at=clock() - timedelta(seconds=1))
        client = MagicMock()
        client.get.return_value = entry.model_dump_json()
        cache = RedisResultCache(redis_client=client, clock=clock)

        assert await cache.get("rust") is None
        client.delete.assert_called_once_with(generate_cache_key("rust"))

    @pytest.mark.asyncio
    async def test_get_miss(self):
        client = MagicMock()
        client.get.return_value = None
        cache = RedisResultCache(redis_client=client, clock=FakeClock())

        assert await cache.get("rust") is None

    @pytest.mark.asyncio
    async def test_connection_error_raises_unavailable(self):
        client = MagicMock()
        client.get.side_effect = ConnectionError("redis down")
        cache = RedisResultCache(redis_client=client, clock=FakeClock())

        with pytest.raises(CacheUnavailableException):
            await cache.get("rust")

    @pytest.mark.asyncio
    async def test_corrupted_payload_raises_serialization(self):
        client = MagicMock()
        client.get.return_value = '{"query": "rust"}'
        cache = RedisResultCache(redis_client=client, clock=FakeClock())

        with pytest.raises(CacheSerializationException):
            await cache.get("rust")

    def test_health_check(self):
        client = MagicMock()
        client.ping.return_value = True
        assert RedisResultCache(redis_client=client).health_check() is True

        client.ping.side_effect = Exception("down")
        assert RedisResultCache(redis_client=client).health_check() is False


def test_expires_at_is_naive_utc():
    from websearch.utils.time_utils import utcnow

    now = utcnow()
    assert isinstance(now, datetime)
    assert now.tzinfo is None
