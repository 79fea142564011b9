"""Import all models for Alembic."""
from .base import TimestampMixin
from .enums import (
    UserRole,
    GalleryStatus,
    SelectionStatus,
    NotificationType,
)
from .user import User
from .gallery import Gallery
from .photo import Photo
from .selection import Selection
from .favorite import Favorite
from .notification import Notification

__all__ = [
    "TimestampMixin",
    "UserRole",
    "GalleryStatus",
    "SelectionStatus",
    "NotificationType",
    "User",
    "Gallery",
    "Photo",
    "Selection",
    "Favorite",
    "Notification",
]
