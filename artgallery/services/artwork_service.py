"""ArtworkService — artwork CRUD with owner-only mutation."""

from __future__ import annotations

import uuid
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.dao.artwork_dao import ArtworkDAO
from artgallery.models.artwork import Artwork
from artgallery.services import UnknownError, ValidationError
from artgallery.services.ownership import require_existing, require_ownership

log = structlog.get_logger(__name__)

RESOURCE = "artwork"


def _store_error(exc: SQLAlchemyError) -> Exception:
    """Classify a store failure raised while writing."""
    if isinstance(exc, IntegrityError):
        return ValidationError(str(exc.orig))
    return UnknownError(str(exc))


def drop_blank_fields(patch: dict[str, Any]) -> dict[str, Any]:
    """Return *patch* without keys whose value is the empty string.

    Clients send ``""`` for fields they do not want to change.
    """
    return {key: val for key, val in patch.items() if val != ""}


class ArtworkService:
    """Stateless service for the artworks resource.

    Reads are open to every authenticated caller; update and delete are
    restricted to the artwork's owner.
    """

    def __init__(self, artwork_dao: ArtworkDAO) -> None:
        self._artwork_dao = artwork_dao

    async def list(self, session: AsyncSession) -> list[Artwork]:
        """Return every artwork in the store, whoever owns it."""
        return await self._artwork_dao.list_all(session)

    async def get(self, session: AsyncSession, artwork_id: uuid.UUID) -> Artwork:
        """Raises :class:`NotFoundError` if the artwork does not exist."""
        artwork = await self._artwork_dao.get_by_id(session, artwork_id)
        return require_existing(artwork, RESOURCE, artwork_id)

    async def create(
        self,
        session: AsyncSession,
        owner_id: uuid.UUID,
        fields: dict[str, Any],
    ) -> Artwork:
        """Create an artwork owned by *owner_id*.

        Any ``owner`` key in *fields* is overwritten by the caller's id.
        Raises :class:`ValidationError` when the store rejects the row.
        """
        values = {**fields, "owner": owner_id}
        try:
            artwork = await self._artwork_dao.create(session, **values)
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc
        log.info("artwork.created", artwork_id=str(artwork.id), owner=str(owner_id))
        return artwork

    async def update(
        self,
        session: AsyncSession,
        caller_id: uuid.UUID,
        artwork_id: uuid.UUID,
        patch: dict[str, Any],
    ) -> Artwork:
        """Merge *patch* into an artwork the caller owns.

        ``owner`` is discarded up front and empty-string values leave the
        stored field unchanged. Raises :class:`NotFoundError`, then
        :class:`ForbiddenError`, before anything is written.
        """
        patch = {key: val for key, val in patch.items() if key != "owner"}

        artwork = await self._artwork_dao.get_by_id(session, artwork_id)
        artwork = require_existing(artwork, RESOURCE, artwork_id)
        require_ownership(caller_id, artwork, RESOURCE)

        changes = drop_blank_fields(patch)
        try:
            updated = await self._artwork_dao.update(session, artwork_id, **changes)
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc
        log.info("artwork.updated", artwork_id=str(artwork_id), fields=sorted(changes))
        return require_existing(updated, RESOURCE, artwork_id)

    async def delete(
        self,
        session: AsyncSession,
        caller_id: uuid.UUID,
        artwork_id: uuid.UUID,
    ) -> None:
        """Hard-delete an artwork the caller owns."""
        artwork = await self._artwork_dao.get_by_id(session, artwork_id)
        artwork = require_existing(artwork, RESOURCE, artwork_id)
        require_ownership(caller_id, artwork, RESOURCE)

        try:
            await self._artwork_dao.delete(session, artwork_id)
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc
        log.info("artwork.deleted", artwork_id=str(artwork_id))
