"""Notification and dashboard schemas."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from uuid import UUID
from typing import Optional, Any, List, Dict

from src.models.enums import NotificationType


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    gallery_id: UUID
    gallery_name: Optional[str] = None
    type: NotificationType
    message: str
    data: Optional[Dict[str, Any]] = None
    read: bool
    created_at: datetime

    @classmethod
    def from_model(cls, notification) -> "NotificationResponse":
        gallery = notification.gallery
        return cls(
            id=notification.id,
            gallery_id=notification.gallery_id,
            gallery_name=gallery.name if gallery else None,
            type=notification.type,
            message=notification.message,
            data=notification.data,
            read=notification.read,
            created_at=notification.created_at,
        )


class NotificationListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    notifications: List[NotificationResponse]
    unread_count: int = Field(..., alias="unreadCount")


class MarkAllReadResponse(BaseModel):
    message: str
    updated: int


class DashboardStatsResponse(BaseModel):
    total_galleries: int = 0
    total_photos: int = 0
    pending_selections: int = 0
    total_favorites: int = 0
    unread_notifications: int = 0


class GalleryStatsResponse(BaseModel):
    gallery_id: UUID
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    favorites: int = 0
