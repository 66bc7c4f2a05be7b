"""시간 유틸리티"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """현재 UTC 시각 (naive). DB DateTime 컬럼과 비교 가능한 형태."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
