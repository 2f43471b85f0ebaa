"""Artworks router.

Every route needs a bearer token. Reads are open to any signed-in user;
PATCH and DELETE only succeed for the artwork's owner.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.api.deps import get_artwork_service, get_current_user, get_session
from artgallery.api.schemas.artwork import (
    ArtworkListResponse,
    ArtworkOut,
    ArtworkResponse,
    CreateArtworkRequest,
    UpdateArtworkRequest,
)
from artgallery.models.user import User
from artgallery.services.artwork_service import ArtworkService

router = APIRouter()


@router.get("", response_model=ArtworkListResponse)
async def list_artworks(
    session: AsyncSession = Depends(get_session),
    _user: User = Depends(get_current_user),
    svc: ArtworkService = Depends(get_artwork_service),
) -> ArtworkListResponse:
    artworks = await svc.list(session)
    return ArtworkListResponse(artworks=[ArtworkOut.model_validate(a) for a in artworks])


@router.get("/{artwork_id}", response_model=ArtworkResponse)
async def get_artwork(
    artwork_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    _user: User = Depends(get_current_user),
    svc: ArtworkService = Depends(get_artwork_service),
) -> ArtworkResponse:
    artwork = await svc.get(session, artwork_id)
    return ArtworkResponse(artwork=ArtworkOut.model_validate(artwork))


@router.post("", response_model=ArtworkResponse, status_code=201)
async def create_artwork(
    body: CreateArtworkRequest,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
    svc: ArtworkService = Depends(get_artwork_service),
) -> ArtworkResponse:
    artwork = await svc.create(session, user.id, body.artwork.model_dump())
    return ArtworkResponse(artwork=ArtworkOut.model_validate(artwork))


@router.patch("/{artwork_id}", status_code=204, response_class=Response)
async def update_artwork(
    artwork_id: uuid.UUID,
    body: UpdateArtworkRequest,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
    svc: ArtworkService = Depends(get_artwork_service),
) -> Response:
    # only keys the client actually sent take part in the merge
    await svc.update(session, user.id, artwork_id, body.artwork.model_dump(exclude_unset=True))
    return Response(status_code=204)


@router.delete("/{artwork_id}", status_code=204, response_class=Response)
async def delete_artwork(
    artwork_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
    user: User = Depends(get_current_user),
    svc: ArtworkService = Depends(get_artwork_service),
) -> Response:
    await svc.delete(session, user.id, artwork_id)
    return Response(status_code=204)
