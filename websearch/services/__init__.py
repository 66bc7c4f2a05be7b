"""비즈니스 로직 서비스 - export only."""

from .impl import DatabaseResultCache, RedisResultCache, ResultCache, create_result_cache

__all__ = ["ResultCache", "DatabaseResultCache", "RedisResultCache", "create_result_cache"]
