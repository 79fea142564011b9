"""Admin notification endpoints."""
from fastapi import APIRouter, Depends, Query
from uuid import UUID

from src.api.deps import get_current_admin, get_notification_service
from src.app.config import settings
from src.models.user import User
from src.schemas.notification import (
    NotificationResponse,
    NotificationListResponse,
    MarkAllReadResponse,
)
from src.schemas.selection import MessageResponse
from src.services.notification_service import NotificationService


router = APIRouter()


@router.get('', response_model=NotificationListResponse)
def list_notifications(
    limit: int = Query(settings.NOTIFICATIONS_PAGE_SIZE, ge=1, le=500),
    current_user: User = Depends(get_current_admin),
    service: NotificationService = Depends(get_notification_service)
):
    """Latest notifications across the admin's galleries, newest first."""
    notifications, unread = service.list_for_admin(current_user.id, limit=limit)
    return NotificationListResponse(
        notifications=[NotificationResponse.from_model(n) for n in notifications],
        unread_count=unread
    )


@router.put('/read-all', response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    current_user: User = Depends(get_current_admin),
    service: NotificationService = Depends(get_notification_service)
):
    updated = service.mark_all_read(current_user.id)
    return MarkAllReadResponse(message='All notifications marked as read', updated=updated)


@router.put('/{notification_id}/read', response_model=MessageResponse)
def mark_notification_read(
    notification_id: UUID,
    current_user: User = Depends(get_current_admin),
    service: NotificationService = Depends(get_notification_service)
):
    service.mark_read(notification_id, current_user.id)
    return MessageResponse(message='Notification marked as read')
