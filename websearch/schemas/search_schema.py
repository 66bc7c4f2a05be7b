"""Pydantic 스키마 정의 (Security & Validation Enhanced)"""
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime


class ProviderKind(str, Enum):
    """검색 프로바이더 종류 (닫힌 집합)

    결과의 source 필드 값으로도 사용됩니다.
    """

    PRIMARY = "Primary"
    FALLBACK = "Fallback"


class SearchResult(BaseModel):
    """웹 검색 결과 1건 (불변)"""
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="결과 제목")
    url: str = Field(..., min_length=1, description="절대 URL")
    snippet: str = Field("", description="요약문")
    source: ProviderKind = Field(..., description="결과 출처: Primary | Fallback")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title must not be blank")
        return v.strip()

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """저장 전 절대 URL로 정규화되어 있어야 함"""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"url must be absolute http(s): {v}")
        return v


class CachedSearch(BaseModel):
    """캐시 엔트리 payload (Redis 직렬화 포맷)"""

    query: str = Field(..., description="정규화된 검색어 (캐시 키)")
    results: List[SearchResult] = Field(default_factory=list, description="저장된 결과 (저장 순서 유지)")
    expires_at: datetime = Field(..., description="만료 시각 (UTC)")


class SearchRequest(BaseModel):
    """웹 검색 요청 (입력 검증 강화)"""
    query: str = Field(..., min_length=1, max_length=500, description="검색어")
    max_results: Optional[int] = Field(None, ge=1, le=50, description="최대 결과 수 (기본 5)")

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        """검색어 검증: 공백/제어문자 제한"""
        if not v or not v.strip():
            raise ValueError("검색어는 공백만으로 구성될 수 없습니다")
        for char in ("\0", "\n", "\r"):
            if char in v:
                raise ValueError("검색어에 허용되지 않는 제어문자가 포함되어 있습니다")
        return v.strip()


class SearchResponse(BaseModel):
    """웹 검색 응답"""
    status: str = Field(..., description="success or error")
    data: List[SearchResult] = Field(default_factory=list, description="검색 결과")
    source: str | None = Field(None, description="실행 경로: cache | primary | fallback | exhausted")
    elapsed_ms: float = Field(0.0, ge=0, description="검색 소요 시간 (밀리초)")
    message: str = Field(..., description="응답 메시지")
    error_code: str | None = Field(None, description="에러 코드 (error 시)")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    cache_backend: str
    timestamp: datetime
    version: str
