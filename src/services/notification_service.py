"""Durable gallery notifications for admins."""
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.app.exceptions import NotFoundError
from src.models.enums import NotificationType
from src.models.notification import Notification
from src.repositories.notification_repo import NotificationRepository
from src.repositories.stats_repo import StatsRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Record and manage the notification log of a gallery."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository(db)

    def emit(
        self,
        gallery_id: UUID,
        type: NotificationType,
        message: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> Optional[Notification]:
        """
        Append one unread notification and commit it.

        Runs after the triggering mutation has committed, so it never
        raises: a storage failure is logged, rolled back and reported
        as None.
        """
        try:
            notification = self.repo.create({
                "gallery_id": gallery_id,
                "type": NotificationType(type),
                "message": message,
                "data": payload or {},
                "read": False,
            })
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to record {type} notification for gallery {gallery_id}")
            return None

        logger.debug(f"📝 Notification {notification.id} ({notification.type.value}) for gallery {gallery_id}")
        return notification

    def mark_read(self, notification_id: UUID, admin_id: UUID) -> Notification:
        """Mark one notification read; only for galleries the admin owns."""
        notification = self.repo.get_owned(notification_id, admin_id)
        if not notification:
            raise NotFoundError("Notification", notification_id)

        notification.read = True
        self.repo.commit()
        return notification

    def mark_all_read(self, admin_id: UUID) -> int:
        updated = self.repo.mark_all_read(admin_id)
        self.repo.commit()
        logger.info(f"Marked {updated} notifications read for admin {admin_id}")
        return updated

    def list_for_admin(self, admin_id: UUID, limit: int = 50) -> Tuple[List[Notification], int]:
        """
        Latest notifications (newest first) plus the admin's unread total.

        Returns:
            Tuple of (notifications, unread count)
        """
        notifications = self.repo.list_for_admin(admin_id, limit=limit)
        unread = StatsRepository(self.db).count_unread_notifications(admin_id)
        return notifications, unread
