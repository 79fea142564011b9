"""Enums for database models."""
import enum


class UserRole(str, enum.Enum):
    """User role types."""
    admin = "admin"
    client = "client"


class GalleryStatus(str, enum.Enum):
    """Gallery lifecycle status."""
    active = "active"
    expired = "expired"
    archived = "archived"


class SelectionStatus(str, enum.Enum):
    """Admin review state of a client selection."""
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class NotificationType(str, enum.Enum):
    """Kinds of events recorded for a gallery."""
    selection = "selection"
    favorite = "favorite"
    select_all = "select_all"
    deselect_all = "deselect_all"
