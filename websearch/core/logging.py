"""로깅 설정

- 단일 named logger (`websearch`) 를 모든 모듈이 공유
- 로그 라인은 `[ORCHESTRATOR]`, `[PROVIDER:Primary]`, `[CACHE]` 같은 컴포넌트 태그로 시작
- 검색어는 사용자 입력이므로 `sanitize_for_log`를 거쳐 기록
"""
import logging
import os
import re
import sys
from typing import Optional

from websearch.core.config import settings


LOGGER_NAME = "websearch"

# Production 환경에서는 DEBUG 로그 비활성화
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

# 검색 요청 중에 시끄러운 외부 라이브러리 로거
_NOISY_LOGGERS = ("curl_cffi", "sqlalchemy.engine", "urllib3", "httpx")

_PROD_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
_DEV_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"


def _resolve_level(level: Optional[str], production: bool) -> int:
    name = (level or settings.log_level or "INFO").upper()
    if production and name == "DEBUG":
        name = "INFO"
    return getattr(logging, name, logging.INFO)


def setup_logging(level: Optional[str] = None, production: Optional[bool] = None) -> logging.Logger:
    """`websearch` 로거 초기화

    여러 번 호출해도 핸들러는 하나만 붙습니다 (레벨/포맷만 갱신).

    Args:
        level: 로그 레벨 이름 (기본: settings.log_level)
        production: 운영 포맷 여부 (기본: ENVIRONMENT=production)
    """
    production = IS_PRODUCTION if production is None else production
    resolved = _resolve_level(level, production)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    # 외부(pytest 등)가 붙인 핸들러는 건드리지 않고 자체 콘솔 핸들러만 관리
    console = next((h for h in logger.handlers if getattr(h, "_websearch_console", False)), None)
    if console is None:
        console = logging.StreamHandler(sys.stdout)
        console._websearch_console = True
        logger.addHandler(console)

    console.setLevel(resolved)
    console.setFormatter(logging.Formatter(
        fmt=_PROD_FORMAT if production else _DEV_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))

    return logger


logger = setup_logging()


_SECRET_PARAM = re.compile(r"(?i)\b(api[_-]?key|key|token|secret|password|sig)=([^&\s]+)")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]+")


def sanitize_for_log(value: Optional[str], max_length: int = 100) -> str:
    """검색어/URL을 로그에 안전하게 남길 형태로 변환

    - 제어 문자(개행 포함) 제거: 로그 라인 위조 방지
    - `key=...` 형태의 값만 마스킹 (자유 텍스트 검색어는 그대로)
    - max_length 초과 시 절단
    """
    if not value:
        return "[empty]"

    result = _CONTROL_CHARS.sub(" ", str(value)).strip()

    result = _SECRET_PARAM.sub(lambda m: f"{m.group(1)}=***", result)

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
