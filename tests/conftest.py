"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Fake 주입 (캐시/프로바이더/HTTP 클라이언트/시계)
- 네트워크 접근 금지
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Sequence

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from websearch.core.database import Base  # noqa: E402
from websearch.core.exceptions import (  # noqa: E402
    CacheUnavailableException,
    ProviderUnavailableException,
)
from websearch.repositories import models  # noqa: E402,F401
from websearch.schemas.search_schema import ProviderKind, SearchResult  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


class FakeClock:
    """수동으로 진행시키는 시계 (UTC naive)"""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class FakeResultCache:
    """오케스트레이터 Unit 테스트용 메모리 캐시 (ResultCache 프로토콜)

    - 만료 엔트리는 읽을 때 삭제
    - get/put 호출 횟수 기록
    - fail_get/fail_put으로 캐시 장애 시뮬레이션
    """

    clock: FakeClock
    store: dict[str, tuple[list[SearchResult], datetime]] = field(default_factory=dict)
    get_calls: int = 0
    put_calls: int = 0
    fail_get: bool = False
    fail_put: bool = False

    async def get(self, key: str):
        self.get_calls += 1
        if self.fail_get:
            raise CacheUnavailableException("read", "simulated outage")
        entry = self.store.get(key)
        if entry is None:
            return None
        results, expires_at = entry
        if expires_at <= self.clock():
            del self.store[key]
            return None
        return list(results), expires_at

    async def put(self, key: str, results: Sequence[SearchResult], ttl: timedelta) -> None:
        self.put_calls += 1
        if self.fail_put:
            raise CacheUnavailableException("write", "simulated outage")
        self.store[key] = (list(results), self.clock() + ttl)

    def health_check(self) -> bool:
        return not self.fail_get


class FakeProvider:
    """ProviderClient 대역

    - results: 반환할 결과 (max_results로 잘라 반환)
    - fail: True면 ProviderUnavailableException
    """

    def __init__(self, kind: ProviderKind, results: Optional[list[SearchResult]] = None, fail: bool = False):
        self.kind = kind
        self.results = results or []
        self.fail = fail
        self.calls: list[tuple[str, int]] = []

    @property
    def name(self) -> str:
        return self.kind.value

    async def fetch(self, query: str, max_results: int) -> list[SearchResult]:
        self.calls.append((query, max_results))
        if self.fail:
            raise ProviderUnavailableException(self.name, "simulated failure")
        return list(self.results[:max_results])


class FakeHttpClient:
    """SharedHttpClient 대역 (요청 기록 + 고정 응답)"""

    def __init__(self, status: int = 200, body: str = "", error: Optional[BaseException] = None):
        self.status = status
        self.body = body
        self.error = error
        self.requests: list[dict] = []

    async def get_text(self, url: str, *, timeout_s: float, headers=None, follow_redirects: bool = True):
        self.requests.append({"url": url, "timeout_s": timeout_s, "headers": headers or {}})
        if self.error is not None:
            raise self.error
        return self.status, self.body


def make_results(kind: ProviderKind, count: int, prefix: str = "result") -> list[SearchResult]:
    return [
        SearchResult(
            title=f"{prefix} {i}",
            url=f"https://example.com/{prefix}/{i}",
            snippet=f"snippet {i}",
            source=kind,
        )
        for i in range(1, count + 1)
    ]


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_cache(fake_clock) -> FakeResultCache:
    return FakeResultCache(clock=fake_clock)


@pytest.fixture
def sqlite_session_factory():
    """인메모리 SQLite (스레드 간 단일 커넥션 공유)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()
