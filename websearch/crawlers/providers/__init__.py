"""프로바이더별 URL 구성/추출 규칙."""

from .duckduckgo import build_duckduckgo_url, parse_duckduckgo_results
from .google import build_google_url, parse_google_results

__all__ = [
    "build_duckduckgo_url",
    "parse_duckduckgo_results",
    "build_google_url",
    "parse_google_results",
]
