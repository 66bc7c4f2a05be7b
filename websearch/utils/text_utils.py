"""Text cleaning helpers."""

from __future__ import annotations

import re


_WHITESPACE_RE = re.compile(r"\s+")


def normalize_query(query: str) -> str:
    """
    검색어를 캐시 키로 정규화 (trim + 소문자)
    
    예시:
    - "  Rust Ownership " -> "rust ownership"
    - "RUST" -> "rust"
    
    Args:
        query: 원본 검색어
        
    Returns:
        정규화된 검색어
    """
    if not query:
        return ""
    return query.strip().lower()


def clean_text(text: str) -> str:
    """HTML에서 뽑은 텍스트의 연속 공백/개행을 단일 공백으로."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()
