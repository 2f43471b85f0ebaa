"""Generic base DAO — async CRUD over a single ORM model."""

import uuid
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseDAO(Generic[ModelT]):
    """Base data-access object. Subclasses set ``model`` class attribute.

    ``immutable`` lists attributes that :meth:`update` refuses to touch;
    subclasses extend it with their own write-once columns.
    """

    model: type[ModelT]
    immutable: ClassVar[frozenset[str]] = frozenset({"id", "created_at", "updated_at"})

    @staticmethod
    def _require_pk(pk: uuid.UUID) -> None:
        """Raise ValueError if *pk* is None."""
        if pk is None:
            raise ValueError("pk must not be None")

    async def get_by_id(self, session: AsyncSession, pk: uuid.UUID) -> ModelT | None:
        self._require_pk(pk)
        return await session.get(self.model, pk)

    async def list_all(self, session: AsyncSession) -> list[ModelT]:
        """Return every row, oldest first."""
        table = self.model.__table__
        stmt = select(self.model).order_by(table.c.created_at, table.c.id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        obj = self.model(**values)
        session.add(obj)
        await session.flush()
        await session.refresh(obj)
        return obj

    async def update(self, session: AsyncSession, pk: uuid.UUID, **values: Any) -> ModelT | None:
        """Merge *values* into the row and return it, or None if it does not exist.

        Raises ``AttributeError`` for immutable or unknown attributes before
        anything is written.
        """
        self._require_pk(pk)
        obj = await session.get(self.model, pk)
        if obj is None:
            return None
        attr_keys = set(self.model.__mapper__.column_attrs.keys())
        for key in values:
            if key in self.immutable:
                raise AttributeError(f"'{key}' is immutable and cannot be updated")
            if key not in attr_keys:
                raise AttributeError(f"{self.model.__name__} has no column '{key}'")
        for key, val in values.items():
            setattr(obj, key, val)
        await session.flush()
        await session.refresh(obj)
        return obj

    async def delete(self, session: AsyncSession, pk: uuid.UUID) -> bool:
        self._require_pk(pk)
        obj = await session.get(self.model, pk)
        if obj is None:
            return False
        await session.delete(obj)
        await session.flush()
        return True

    async def get_by_field(self, session: AsyncSession, **filters: Any) -> ModelT | None:
        """Return the first row matching all *filters*, or None.

        Usage::

            user = await dao.get_by_field(session, username="alice")

        Raises ``ValueError`` if called without any filters.
        """
        if not filters:
            raise ValueError("get_by_field() requires at least one filter")
        stmt = select(self.model)
        for key, val in filters.items():
            stmt = stmt.where(getattr(self.model, key) == val)
        result = await session.execute(stmt)
        return result.scalars().first()
