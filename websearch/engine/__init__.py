"""Engine Layer - Core Orchestration

- SearchOrchestrator: 검색 진입점 (Cache → Primary → Fallback)
- CacheAdapter: 캐시 실패를 소프트 실패로 변환
- SearchOutcome / ExecutionPath: 실행 결과 표준 형식
"""

from .cache_adapter import CacheAdapter
from .orchestrator import SearchOrchestrator
from .result import ExecutionPath, SearchOutcome

__all__ = [
    "SearchOrchestrator",
    "CacheAdapter",
    "SearchOutcome",
    "ExecutionPath",
]
