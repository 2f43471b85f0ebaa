"""Dependency injection — session, auth, and service singletons."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from artgallery.core.database import Base
from artgallery.dao.artwork_dao import ArtworkDAO
from artgallery.dao.user_dao import UserDAO
from artgallery.models.user import User
from artgallery.services import AuthenticationError
from artgallery.services.artwork_service import ArtworkService
from artgallery.services.auth_service import AuthService

# ---------------------------------------------------------------------------
# DAO / service singletons
# ---------------------------------------------------------------------------
_user_dao = UserDAO()
_artwork_dao = ArtworkDAO()

_auth_service = AuthService(_user_dao)
_artwork_service = ArtworkService(_artwork_dao)

# ---------------------------------------------------------------------------
# Engine / session factory (initialised by app lifespan)
# ---------------------------------------------------------------------------
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def init_session_factory(database_url: str | None = None) -> async_sessionmaker[AsyncSession]:
    """Create the async engine and session factory. Called once at startup."""
    global _engine, _session_factory  # noqa: PLW0603
    url = database_url or os.environ.get(
        "ARTGALLERY_DATABASE_URL", "postgresql+asyncpg://localhost/artgallery"
    )
    _engine = create_async_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=1800,
    )
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _session_factory


async def create_tables() -> None:
    """Create any missing tables on the initialised engine."""
    if _engine is None:
        raise RuntimeError("call init_session_factory() before create_tables()")
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Dispose the async engine, closing all pooled connections."""
    global _engine  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def set_session_factory(factory: async_sessionmaker[AsyncSession]) -> None:
    """Override session factory (for testing)."""
    global _session_factory  # noqa: PLW0603
    _session_factory = factory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a per-request session with automatic commit/rollback."""
    if _session_factory is None:
        raise RuntimeError("call init_session_factory() before handling requests")
    async with _session_factory() as session:
        async with session.begin():
            yield session


# ---------------------------------------------------------------------------
# Auth dependency
# ---------------------------------------------------------------------------

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    session: AsyncSession = Depends(get_session),
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User:
    """Extract and validate Bearer token, return the authenticated User."""
    if credentials is None:
        raise AuthenticationError("missing authorization header")
    return await _auth_service.get_current_user(session, credentials.credentials)


# ---------------------------------------------------------------------------
# Service getters (for Depends())
# ---------------------------------------------------------------------------


def get_auth_service() -> AuthService:
    return _auth_service


def get_artwork_service() -> ArtworkService:
    return _artwork_service
