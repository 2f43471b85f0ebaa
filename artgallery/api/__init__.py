"""ArtGallery REST API — FastAPI application factory.

Run with::

    uvicorn artgallery.api:create_app --factory
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from artgallery.api.deps import (
    create_tables,
    dispose_engine,
    get_auth_service,
    init_session_factory,
)
from artgallery.api.errors import register_error_handlers
from artgallery.api.middleware.request_id import RequestIDMiddleware
from artgallery.api.routers import artworks, auth
from artgallery.core.logging import setup_logging

log = structlog.get_logger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: open the store, create tables, ensure admin. Shutdown: dispose engine."""
    factory = init_session_factory()
    await create_tables()
    async with factory() as session:
        async with session.begin():
            await get_auth_service().ensure_admin_exists(session)
    log.info("app.started")
    yield
    await dispose_engine()
    log.info("app.stopped")


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title="ArtGallery",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=_lifespan,
    )

    register_error_handlers(app)

    cors_origins = os.environ.get("ARTGALLERY_CORS_ORIGINS", "http://localhost:3000")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(artworks.router, prefix="/artworks", tags=["artworks"])

    return app
