"""검색 캐시 리포지토리 - DB 기반 영속 캐시."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from websearch.core.logging import logger
from websearch.core.exceptions import DatabaseException
from websearch.repositories.models import SearchCache


class SearchCacheRepository:
    def __init__(self, db: Session):
        self.db = db

    def find(self, cache_key: str) -> Optional[SearchCache]:
        """캐시 행 조회 (만료 여부는 호출자가 판단)."""
        if not cache_key:
            return None
        return self.db.query(SearchCache).filter(SearchCache.query == cache_key).first()

    def delete(self, row: SearchCache) -> None:
        """만료된 캐시 행 삭제."""
        try:
            self.db.delete(row)
            self.db.flush()
        except Exception as e:
            logger.error(f"DB cache delete error: {type(e).__name__}: {e}")
            raise DatabaseException(f"Failed to delete search cache: {e}")

    def upsert(self, cache_key: str, results_json: str, expires_at: datetime) -> None:
        """캐시를 삽입/갱신 (기존 결과는 병합 없이 교체)."""
        if not cache_key:
            return
        try:
            row = self.find(cache_key)
            if row is None:
                self.db.add(
                    SearchCache(query=cache_key, results_json=results_json, expires_at=expires_at)
                )
                try:
                    self.db.flush()
                    return
                except IntegrityError:
                    # 동시 삽입 경합: 먼저 들어간 행을 갱신 (last write wins)
                    self.db.rollback()
                    row = self.find(cache_key)
                    if row is None:
                        raise

            row.results_json = results_json
            row.expires_at = expires_at
            self.db.flush()
        except Exception as e:
            logger.error(f"DB cache write error: {type(e).__name__}: {e}")
            raise DatabaseException(f"Failed to write search cache: {e}")
