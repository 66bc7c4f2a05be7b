"""FastAPI 앱 팩토리

uvicorn websearch.app:app 으로 실행합니다.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from websearch.api import health_router, search_router
from websearch.core.config import settings
from websearch.core.database import init_db
from websearch.core.exceptions import WebSearchException
from websearch.core.logging import logger
from websearch.crawlers.http_client import shutdown_shared_http_client
from websearch.schemas.search_schema import SearchResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """시작: 캐시 테이블 준비 / 종료: 공유 HTTP 세션 정리"""
    logger.info(
        f"[APP] Starting (cache_backend={settings.cache_backend}, "
        f"primary={settings.primary_search_url}, fallback={settings.fallback_search_url})"
    )
    if settings.cache_backend == "database":
        init_db()
    yield
    logger.info("[APP] Shutting down")
    try:
        await shutdown_shared_http_client()
    except Exception as e:
        logger.warning(f"[APP] HTTP client shutdown failed: {type(e).__name__}: {e}")


async def websearch_exception_handler(request: Request, exc: WebSearchException) -> JSONResponse:
    """도메인 예외 → 표준 에러 응답 (오케스트레이터 밖에서 새어 나온 경우)"""
    logger.error(f"[API] {request.method} {request.url.path} failed: {exc}")
    body = SearchResponse(status="error", message=exc.message, error_code=exc.error_code)
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


def create_app() -> FastAPI:
    """FastAPI 앱 생성"""
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(WebSearchException, websearch_exception_handler)

    app.include_router(health_router)
    app.include_router(search_router)

    return app


app = create_app()
