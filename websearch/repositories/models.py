"""데이터베이스 모델"""
from sqlalchemy import Column, Integer, String, TIMESTAMP, func, Text, DateTime
from websearch.core.database import Base


class SearchCache(Base):
    """영속 검색 캐시 테이블.

    - query: 정규화된 검색어 (trim + 소문자), 캐시 식별자
    - results_json: SearchResult 목록을 JSON으로 직렬화한 값
    - expires_at: 만료 시각 (UTC, naive). 읽기 시점에만 검사/삭제
    """

    __tablename__ = "search_cache"

    id = Column(Integer, primary_key=True, index=True)
    query = Column(String(500), nullable=False, unique=True, index=True)
    results_json = Column(Text, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<SearchCache(query={self.query}, expires_at={self.expires_at})>"
