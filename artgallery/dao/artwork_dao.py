"""ArtworkDAO — artworks table operations."""

from typing import ClassVar

from artgallery.dao.base import BaseDAO
from artgallery.models.artwork import Artwork


class ArtworkDAO(BaseDAO[Artwork]):
    model = Artwork
    # owner is bound once at creation
    immutable: ClassVar[frozenset[str]] = BaseDAO.immutable | {"owner"}
