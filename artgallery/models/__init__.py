"""SQLAlchemy ORM models — one file per table."""

from artgallery.models.artwork import Artwork
from artgallery.models.user import User

__all__ = [
    "Artwork",
    "User",
]
