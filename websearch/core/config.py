"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


_CACHE_BACKENDS = ("database", "redis")


class Settings(BaseSettings):
    """애플리케이션 설정"""
    
    # 데이터베이스 (영속 검색 캐시)
    database_url: str = "sqlite:///./websearch_cache.db"
    
    # Redis (cache_backend=redis 일 때만 사용)
    redis_url: str = "redis://localhost:6379/0"
    cache_backend: str = "database"
    cache_ttl: int = 86400  # 24시간
    
    # 검색
    search_default_max_results: int = 5
    search_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # HTTP 클라이언트
    # - search_http_timeout_s: 프로바이더 단일 요청 타임아웃 (초과 시 폴백)
    search_http_timeout_s: float = 10.0
    search_http_impersonate: str = "chrome110"
    search_http_max_clients: int = 20

    # 프로바이더 엔드포인트 (Primary → Fallback 순서)
    primary_search_url: str = "https://html.duckduckgo.com/html/"
    fallback_search_url: str = "https://www.google.com/search"
    
    # API
    api_title: str = "웹 검색 서비스"
    api_version: str = "1.0.0"
    api_description: str = "Cache-Aside 전략과 프로바이더 폴백으로 웹 검색 결과를 반환합니다."
    
    # 로깅
    log_level: str = "INFO"
    
    @field_validator("cache_ttl")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl must be positive")
        return v

    @field_validator("search_http_timeout_s")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("search_http_timeout_s must be positive")
        return v

    @field_validator("search_default_max_results", "search_http_max_clients")
    @classmethod
    def validate_positive_counts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("search_default_max_results and search_http_max_clients must be >= 1")
        return v

    @field_validator("cache_backend")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        backend = (v or "").strip().lower()
        if backend not in _CACHE_BACKENDS:
            raise ValueError(f"cache_backend must be one of {_CACHE_BACKENDS}")
        return backend

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v:
            raise ValueError("database_url must not be empty")
        return v
    
    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
