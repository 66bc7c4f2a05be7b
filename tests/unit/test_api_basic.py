"""API 기본 테스트 (의존성 오버라이드, 네트워크 없음)"""
import pytest
from fastapi.testclient import TestClient

from websearch.api.routes.search_routes import get_cache_adapter, get_orchestrator
from websearch.app import create_app
from websearch.engine import CacheAdapter, SearchOrchestrator
from websearch.schemas.search_schema import ProviderKind
from tests.conftest import FakeClock, FakeProvider, FakeResultCache, make_results


@pytest.fixture
def fake_cache():
    return FakeResultCache(clock=FakeClock())


@pytest.fixture
def client(fake_cache):
    app = create_app()
    adapter = CacheAdapter(fake_cache)
    orchestrator = SearchOrchestrator(
        cache=adapter,
        providers=[
            FakeProvider(ProviderKind.PRIMARY, fail=True),
            FakeProvider(ProviderKind.FALLBACK, make_results(ProviderKind.FALLBACK, 10)),
        ],
    )
    app.dependency_overrides[get_cache_adapter] = lambda: adapter
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return TestClient(app)


def test_search_endpoint(client):
    response = client.post("/api/v1/search", json={"query": "Rust", "max_results": 3})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["source"] == "fallback"
    assert len(body["data"]) == 3
    assert body["data"][0]["source"] == "Fallback"


def test_search_endpoint_second_call_served_from_cache(client):
    client.post("/api/v1/search", json={"query": "Rust"})
    response = client.post("/api/v1/search", json={"query": "rust"})

    body = response.json()
    assert body["source"] == "cache"
    assert len(body["data"]) == 5


def test_search_endpoint_validation(client):
    response = client.post("/api/v1/search", json={"query": "   "})
    assert response.status_code == 422

    response = client.post("/api/v1/search", json={"query": "rust", "max_results": 0})
    assert response.status_code == 422


def test_health_ok(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["cache_backend"] == "database"


def test_health_degraded(client, fake_cache):
    fake_cache.fail_get = True

    response = client.get("/health")

    assert response.json()["status"] == "degraded"


def test_domain_exception_mapped_to_error_response(fake_cache):
    from unittest.mock import AsyncMock

    from websearch.core.exceptions import DatabaseException

    app = create_app()
    broken = AsyncMock()
    broken.search_detailed = AsyncMock(side_effect=DatabaseException("db down"))
    app.dependency_overrides[get_orchestrator] = lambda: broken

    response = TestClient(app).post("/api/v1/search", json={"query": "rust"})

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "error"
    assert body["error_code"] == "DB_ERROR"
