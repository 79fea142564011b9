"""Notification repository."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import Uuid, desc
from sqlalchemy.orm import Session, contains_eager

from src.db.adapter import DatabaseAdapter
from src.repositories.base import BaseRepository
from src.models.gallery import Gallery
from src.models.notification import Notification


MARK_ALL_READ_SQL = """
UPDATE notifications SET read = :read
WHERE read = :unread
  AND gallery_id IN (SELECT id FROM galleries WHERE admin_id = :admin_id)
"""


class NotificationRepository(BaseRepository[Notification]):
    """Repository for the per-gallery notification log."""

    def __init__(self, db: Session):
        super().__init__(Notification, db)

    def get_owned(self, notification_id: UUID, admin_id: UUID) -> Optional[Notification]:
        return self.db.query(Notification).join(
            Gallery, Notification.gallery_id == Gallery.id
        ).filter(
            Notification.id == notification_id,
            Gallery.admin_id == admin_id
        ).first()

    def list_for_admin(self, admin_id: UUID, limit: int = 50) -> List[Notification]:
        """Newest first across every gallery the admin owns."""
        return self.db.query(Notification).join(Notification.gallery).options(
            contains_eager(Notification.gallery)
        ).filter(
            Gallery.admin_id == admin_id
        ).order_by(desc(Notification.created_at)).limit(limit).all()

    def mark_all_read(self, admin_id: UUID) -> int:
        """Flag every unread notification of the admin's galleries; caller commits."""
        result = DatabaseAdapter(self.db).run(
            MARK_ALL_READ_SQL,
            {"read": True, "unread": False, "admin_id": admin_id},
            types={"admin_id": Uuid()},
        )
        return result.rowcount
