"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 3000
      or: python -m src.main
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from config.settings import settings
from src.sb_account.api.router import router as account_router
from src.sb_common.errors import AppError, StoreError
from src.sb_common.redis_client import close_redis
from src.sb_gateway.api.router import router as auth_router
from src.sb_gateway.middleware.request_log import RequestLogMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: log the configured backends. Shutdown: release pools."""
    logger.info(
        "%s %s starting (store=%s, sessions=%s)",
        settings.APP_NAME,
        settings.APP_VERSION,
        settings.STORE_BACKEND,
        settings.SESSION_BACKEND,
    )
    yield
    if settings.STORE_BACKEND == "sql":
        from src.sb_common.database import engine

        await engine.dispose()
    if settings.SESSION_BACKEND == "redis":
        await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)

# "*" cannot be combined with credentials; explicit origins may send the cookie
_origins = settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials="*" not in _origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> PlainTextResponse:
    if exc.http_status >= 500:
        detail = exc.detail if isinstance(exc, StoreError) else exc.message
        logger.error(
            "%s %s failed with %d: %s", request.method, request.url.path, exc.code, detail
        )
        return PlainTextResponse("Internal server error", status_code=exc.http_status)
    return PlainTextResponse(exc.message, status_code=exc.http_status)


app.include_router(auth_router)
app.include_router(account_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": settings.APP_VERSION}


def run() -> None:
    """Console entry point: serve on settings.HOST:settings.PORT."""
    logger.info("Server running on http://localhost:%d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, loop="uvloop")


if __name__ == "__main__":
    run()
