"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class WebSearchException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)
    
    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 프로바이더 관련 예외
class ProviderException(WebSearchException):
    """검색 프로바이더 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "PROVIDER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "PROVIDER_ERROR", details)


class ProviderUnavailableException(ProviderException):
    """단일 프로바이더 실패 (전송 오류, 비정상 상태코드, 타임아웃, 차단, 파싱 오류)

    오케스트레이터가 다음 프로바이더로 폴백하는 신호이며 호출자에게 노출되지 않습니다.
    """
    def __init__(self, provider: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Provider '{provider}' unavailable: {reason}"
        super().__init__(message, "PROVIDER_UNAVAILABLE",
                        details or {"provider": provider, "reason": reason})
        self.provider = provider
        self.reason = reason


class AllProvidersExhaustedException(ProviderException):
    """모든 프로바이더 실패

    호출자에게 raise하지 않고 빈 결과로 변환됩니다 (로깅용).
    """
    def __init__(self, query: str, attempts: Optional[list[str]] = None, details: Optional[dict[str, Any]] = None):
        attempts = attempts or []
        message = f"All search providers failed for query: {query}"
        super().__init__(message, "ALL_PROVIDERS_EXHAUSTED",
                        details or {"query": query, "attempts": attempts})
        self.attempts = attempts


# 캐시 관련 예외
class CacheException(WebSearchException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheUnavailableException(CacheException):
    """캐시 읽기/쓰기 실패"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache {operation} failed: {reason}"
        super().__init__(message, "CACHE_UNAVAILABLE",
                        details or {"operation": operation, "reason": reason})


class CacheSerializationException(CacheException):
    """캐시 직렬화/역직렬화 오류"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache {operation} failed: {reason}"
        super().__init__(message, "CACHE_SERIALIZATION_ERROR", 
                        details or {"operation": operation, "reason": reason})


# 데이터베이스 관련 예외
class DatabaseException(WebSearchException):
    """데이터베이스 관련 예외"""
    def __init__(self, message: str, error_code: str = "DB_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "DB_ERROR", details)


# 유효성 검증 관련 예외
class ValidationException(WebSearchException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR", 
                        details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """유효하지 않은 검색어"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("query", reason, details)
