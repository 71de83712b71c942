"""FastAPI application factory for the scanner API."""

from __future__ import annotations

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware

from config.settings import settings
from scanner.api.limiter import limiter
from scanner.api.schemas import API_VERSION


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(
        title="Token Safety Scanner API",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.api_debug else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Public API — browser extensions and web front-ends call it directly
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    from scanner.api.routers.health import router as health_router
    from scanner.api.routers.scan import router as scan_router

    app.include_router(health_router)
    app.include_router(scan_router)

    return app
