"""
Request/response schemas for the proofing API.
"""

from .selection import (
    ClientPhotoAction,
    ClientGalleryAction,
    BulkSelectionRequest,
    ToggleSelectionResponse,
    SelectionCountResponse,
    ToggleFavoriteResponse,
    MessageResponse,
    BulkReviewResponse,
    SelectionResponse,
    FavoriteResponse,
    ClientSelectionListResponse,
    ClientFavoriteListResponse,
    GallerySelectionsResponse,
)
from .notification import (
    NotificationResponse,
    NotificationListResponse,
    MarkAllReadResponse,
    DashboardStatsResponse,
    GalleryStatsResponse,
)

__all__ = [
    "ClientPhotoAction",
    "ClientGalleryAction",
    "BulkSelectionRequest",
    "ToggleSelectionResponse",
    "SelectionCountResponse",
    "ToggleFavoriteResponse",
    "MessageResponse",
    "BulkReviewResponse",
    "SelectionResponse",
    "FavoriteResponse",
    "ClientSelectionListResponse",
    "ClientFavoriteListResponse",
    "GallerySelectionsResponse",
    "NotificationResponse",
    "NotificationListResponse",
    "MarkAllReadResponse",
    "DashboardStatsResponse",
    "GalleryStatsResponse",
]
