"""Repositories implementation package."""

from .search_cache_repository import SearchCacheRepository

__all__ = ["SearchCacheRepository"]
