"""Service implementations."""

from .cache_service import DatabaseResultCache, RedisResultCache, ResultCache, create_result_cache

__all__ = ["ResultCache", "DatabaseResultCache", "RedisResultCache", "create_result_cache"]
