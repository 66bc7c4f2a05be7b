"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 문자열)
- 엔진/네트워크 의존 없음
"""

from .html_pages import (
    DDG_BLOCKED_HTML,
    DDG_NO_RESULTS_HTML,
    DDG_RUST_OWNERSHIP_HTML,
    GOOGLE_BLOCKED_HTML,
    GOOGLE_RESULTS_HTML,
)

__all__ = [
    "DDG_RUST_OWNERSHIP_HTML",
    "DDG_NO_RESULTS_HTML",
    "DDG_BLOCKED_HTML",
    "GOOGLE_RESULTS_HTML",
    "GOOGLE_BLOCKED_HTML",
]
