"""Artwork request/response schemas.

Requests and responses wrap the record in an ``artwork`` envelope; the list
response uses ``artworks``.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

Token = Annotated[str, StringConstraints(min_length=1)]


class ArtworkCreate(BaseModel):
    # unknown keys (including ``owner``) are ignored
    name: str = Field(min_length=1)
    canvas: list[Token] = Field(default_factory=list)
    colors: list[Token] = Field(default_factory=list)


class ArtworkPatch(BaseModel):
    """Partial update; ``""`` means leave the field as it is."""

    name: str | None = None
    canvas: list[Token] | Literal[""] | None = None
    colors: list[Token] | Literal[""] | None = None


class CreateArtworkRequest(BaseModel):
    artwork: ArtworkCreate


class UpdateArtworkRequest(BaseModel):
    artwork: ArtworkPatch


class ArtworkOut(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID
    name: str
    canvas: list[str]
    colors: list[str]
    owner: uuid.UUID
    created_at: datetime
    updated_at: datetime


class ArtworkResponse(BaseModel):
    artwork: ArtworkOut


class ArtworkListResponse(BaseModel):
    artworks: list[ArtworkOut]
