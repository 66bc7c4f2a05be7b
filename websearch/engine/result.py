"""Search Outcome Standard Format

오케스트레이터 실행 결과의 표준 형식을 정의합니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from websearch.schemas.search_schema import SearchResult


class ExecutionPath(str, Enum):
    """실행 경로

    검색 결과가 어디서 왔는지를 나타냅니다.
    """

    CACHE = "cache"
    PRIMARY = "primary"
    FALLBACK = "fallback"
    EXHAUSTED = "exhausted"


@dataclass
class SearchOutcome:
    """검색 실행 결과

    Attributes:
        query: 원본 검색어
        results: 반환할 결과 목록 (비어 있을 수 있음)
        path: 실행 경로
        elapsed_ms: 소요 시간 (밀리초)
        errors: 실패한 프로바이더의 오류 메시지
    """

    query: str
    results: List[SearchResult]
    path: ExecutionPath
    elapsed_ms: float = 0.0
    errors: List[str] = field(default_factory=list)

    @property
    def from_cache(self) -> bool:
        return self.path == ExecutionPath.CACHE

    @classmethod
    def empty(cls, query: str, elapsed_ms: float = 0.0, errors: List[str] | None = None) -> "SearchOutcome":
        """결과 없음 (모든 프로바이더 실패 또는 잘못된 입력)"""
        return cls(
            query=query,
            results=[],
            path=ExecutionPath.EXHAUSTED,
            elapsed_ms=elapsed_ms,
            errors=list(errors or []),
        )
