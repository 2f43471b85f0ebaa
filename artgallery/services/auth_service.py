"""AuthService — bearer-token authentication, sign-up and admin bootstrap."""

import os
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import structlog
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.dao.user_dao import UserDAO
from artgallery.models.user import User
from artgallery.services import AuthenticationError, ConflictError

log = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def _hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def _verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against a bcrypt hash."""
    return bcrypt.checkpw(password.encode(), password_hash.encode())


# ---------------------------------------------------------------------------
# JWT configuration
# ---------------------------------------------------------------------------

# Pre-computed bcrypt hash for timing-safe login (user-not-found path)
_DUMMY_HASH = bcrypt.hashpw(b"dummy", bcrypt.gensalt()).decode()

_ALGORITHM = "HS256"
_ACCESS_TOKEN_EXPIRE = timedelta(minutes=30)
_REFRESH_TOKEN_EXPIRE = timedelta(days=7)

_ENV_JWT_SECRET = "ARTGALLERY_JWT_SECRET"
_ENV_ADMIN_USERNAME = "ARTGALLERY_ADMIN_USERNAME"
_ENV_ADMIN_EMAIL = "ARTGALLERY_ADMIN_EMAIL"
_ENV_ADMIN_PASSWORD = "ARTGALLERY_ADMIN_PASSWORD"


def _get_secret() -> str:
    """Read JWT secret from environment. Raises if not set."""
    secret = os.environ.get(_ENV_JWT_SECRET)
    if not secret:
        raise RuntimeError(f"{_ENV_JWT_SECRET} environment variable is required")
    return secret


def _encode(sub: str, token_type: str, ttl: timedelta) -> str:
    payload = {
        "sub": sub,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + ttl,
    }
    return jwt.encode(payload, _get_secret(), algorithm=_ALGORITHM)


def _decode(token: str, expected_type: str) -> str:
    """Verify *token* and return its subject.

    Raises :class:`AuthenticationError` for bad signatures, expiry, wrong
    token type, or a missing subject.
    """
    try:
        payload = jwt.decode(token, _get_secret(), algorithms=[_ALGORITHM])
    except JWTError:
        raise AuthenticationError(f"invalid {expected_type} token")

    if payload.get("type") != expected_type:
        raise AuthenticationError("invalid token type")

    sub = payload.get("sub")
    if not sub:
        raise AuthenticationError("invalid token payload")
    return sub


# ---------------------------------------------------------------------------
# Token data classes
# ---------------------------------------------------------------------------


class TokenPair:
    """Access + refresh token pair returned by login."""

    __slots__ = ("access_token", "refresh_token", "token_type")

    def __init__(self, access_token: str, refresh_token: str) -> None:
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.token_type = "bearer"


class AccessToken:
    """Single access token returned by refresh."""

    __slots__ = ("access_token", "token_type")

    def __init__(self, access_token: str) -> None:
        self.access_token = access_token
        self.token_type = "bearer"


# ---------------------------------------------------------------------------
# AuthService
# ---------------------------------------------------------------------------


class AuthService:
    """Stateless authentication service.

    Resolves bearer tokens to users, issues tokens, registers accounts and
    bootstraps the admin user.
    """

    def __init__(self, user_dao: UserDAO) -> None:
        self._user_dao = user_dao

    # -- Bootstrap ---------------------------------------------------------

    async def ensure_admin_exists(self, session: AsyncSession) -> None:
        """Create the initial admin user from environment variables.

        Reads ``ARTGALLERY_ADMIN_USERNAME``, ``ARTGALLERY_ADMIN_EMAIL``,
        and ``ARTGALLERY_ADMIN_PASSWORD``. Silently skips if any are missing.
        """
        username = os.environ.get(_ENV_ADMIN_USERNAME)
        email = os.environ.get(_ENV_ADMIN_EMAIL)
        password = os.environ.get(_ENV_ADMIN_PASSWORD)

        if not all([username, email, password]):
            return

        await self._user_dao.upsert(
            session,
            username=username,
            email=email,
            password_hash=_hash_password(password),
            role="admin",
        )
        log.info("auth.admin_ensured", username=username)

    # -- Sign-up -----------------------------------------------------------

    async def register(
        self, session: AsyncSession, *, username: str, email: str, password: str
    ) -> User:
        """Create a regular account.

        Raises :class:`ConflictError` if the username or email is taken.
        """
        if await self._user_dao.username_or_email_taken(session, username, email):
            raise ConflictError("username or email already registered")
        user = await self._user_dao.create(
            session,
            username=username,
            email=email,
            password_hash=_hash_password(password),
        )
        log.info("auth.registered", user_id=str(user.id))
        return user

    # -- Login / Token -----------------------------------------------------

    async def login(self, session: AsyncSession, username: str, password: str) -> TokenPair:
        """Verify credentials and return an access + refresh token pair.

        Raises :class:`AuthenticationError` on invalid credentials.
        Does not distinguish between "user not found" and "wrong password".
        """
        user = await self._user_dao.get_by_username(session, username)
        if user is None:
            # Constant-time: run bcrypt even when user doesn't exist
            _verify_password(password, _DUMMY_HASH)
            raise AuthenticationError("invalid credentials")
        if not _verify_password(password, user.password_hash):
            raise AuthenticationError("invalid credentials")

        sub = str(user.id)
        return TokenPair(
            _encode(sub, "access", _ACCESS_TOKEN_EXPIRE),
            _encode(sub, "refresh", _REFRESH_TOKEN_EXPIRE),
        )

    def refresh(self, refresh_token: str) -> AccessToken:
        """Validate a refresh token and issue a new access token.

        Stateless: no database query.

        Raises :class:`AuthenticationError` on invalid or expired token.
        """
        sub = _decode(refresh_token, "refresh")
        return AccessToken(_encode(sub, "access", _ACCESS_TOKEN_EXPIRE))

    async def get_current_user(self, session: AsyncSession, token: str) -> User:
        """Decode an access token and return the corresponding user.

        Raises :class:`AuthenticationError` on invalid token or unknown user.
        """
        sub = _decode(token, "access")
        try:
            user_id = uuid.UUID(sub)
        except ValueError:
            raise AuthenticationError("invalid token payload")

        user = await self._user_dao.get_by_id(session, user_id)
        if user is None:
            raise AuthenticationError("user not found")
        return user
