"""Existence and ownership checks shared by every record-targeting operation.

Callers run :func:`require_existing` before :func:`require_ownership`, so a
request for a missing id always yields NotFound and never Forbidden.
"""

from __future__ import annotations

import uuid
from typing import Any, Protocol, TypeVar

from artgallery.services import ForbiddenError, NotFoundError


class Owned(Protocol):
    id: Any
    owner: Any


RecordT = TypeVar("RecordT")


def require_existing(record: RecordT | None, resource: str, resource_id: Any) -> RecordT:
    """Return *record*, or raise :class:`NotFoundError` if the lookup came back empty."""
    if record is None:
        raise NotFoundError(resource, resource_id)
    return record


def require_ownership(caller_id: uuid.UUID, record: Owned, resource: str) -> None:
    """Raise :class:`ForbiddenError` unless *caller_id* owns *record*."""
    if record.owner != caller_id:
        raise ForbiddenError(resource, record.id)
