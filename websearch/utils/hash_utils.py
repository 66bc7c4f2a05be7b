"""해싱 유틸리티"""
import hashlib

from .text_utils import normalize_query


def hash_string(text: str) -> str:
    """
    문자열을 MD5 해시로 변환
    
    Args:
        text: 해시할 문자열
        
    Returns:
        MD5 해시 문자열
    """
    return hashlib.md5(text.encode()).hexdigest()


def generate_cache_key(query: str) -> str:
    """
    검색어로 Redis 캐시 키 생성
    
    대소문자만 다른 검색어는 같은 키로 모입니다.
    
    Args:
        query: 검색어 (원문 또는 정규화된 값)
        
    Returns:
        Redis 캐시 키
    """
    hashed = hash_string(normalize_query(query))
    return f"search:{hashed}"
