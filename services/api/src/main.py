"""Identity provider API - FastAPI with SQLAlchemy."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import time
import uuid

from fastapi import FastAPI, Request
import structlog

from shared.logging_config import clear_context, set_correlation_id, setup_logging

from . import routers
from .config import get_settings
from .database import engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    setup_logging(
        service_name=settings.service_name,
        log_format=settings.log_format,
        log_level=settings.log_level,
    )
    yield
    await engine.dispose()


app = FastAPI(
    title="Identity Provider Domains API",
    description="Identity providers and the internet domains linked to them",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def correlation_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID", f"req_{uuid.uuid4().hex[:8]}")
    set_correlation_id(correlation_id)
    structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)

    start = time.time()
    logger = structlog.get_logger()

    try:
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        if response.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "http_request_failed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
        else:
            logger.info(
                "http_request", status_code=response.status_code, duration_ms=round(duration_ms, 2)
            )

        response.headers["X-Correlation-ID"] = correlation_id
        return response
    except Exception as e:
        duration_ms = (time.time() - start) * 1000
        logger.error(
            "http_request_exception",
            error=str(e),
            error_type=type(e).__name__,
            duration_ms=round(duration_ms, 2),
            exc_info=True,
        )
        raise
    finally:
        clear_context()


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Identity Provider Domains API",
        "version": "0.1.0",
        "description": "Identity providers and the internet domains linked to them",
    }


app.include_router(routers.health.router)
app.include_router(routers.identity_providers.router, prefix="/api")
app.include_router(routers.identity_providers.resolve_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)  # noqa: S104
