"""Aggregate counts for badges, gating and the admin dashboard.

Every count is read fresh from the rows; there are no stored counters to
keep in step with the selection and favorite tables.
"""
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy import Uuid, func
from sqlalchemy.orm import Session

from src.db.adapter import DatabaseAdapter
from src.models.enums import SelectionStatus
from src.models.favorite import Favorite
from src.models.gallery import Gallery
from src.models.notification import Notification
from src.models.selection import Selection


DASHBOARD_STATS_SQL = """
SELECT
    (SELECT COUNT(*) FROM galleries g WHERE g.admin_id = :admin_id) AS total_galleries,
    (SELECT COUNT(*) FROM photos p JOIN galleries g ON p.gallery_id = g.id
        WHERE g.admin_id = :admin_id) AS total_photos,
    (SELECT COUNT(*) FROM selections s JOIN galleries g ON s.gallery_id = g.id
        WHERE g.admin_id = :admin_id AND s.status = :pending) AS pending_selections,
    (SELECT COUNT(*) FROM favorites f JOIN galleries g ON f.gallery_id = g.id
        WHERE g.admin_id = :admin_id) AS total_favorites,
    (SELECT COUNT(*) FROM notifications n JOIN galleries g ON n.gallery_id = g.id
        WHERE g.admin_id = :admin_id AND n.read = :unread) AS unread_notifications
"""


class StatsRepository:
    """Read-only aggregation queries."""

    def __init__(self, db: Session):
        self.db = db
        self.adapter = DatabaseAdapter(db)

    def count_client_selections(self, gallery_id: UUID, client_identifier: str) -> int:
        return self.db.query(func.count(Selection.id)).filter(
            Selection.gallery_id == gallery_id,
            Selection.client_identifier == client_identifier
        ).scalar() or 0

    def count_by_status(
        self,
        gallery_id: Optional[UUID] = None,
        admin_id: Optional[UUID] = None
    ) -> Dict[str, int]:
        """
        Selections per status, zero-filled.

        Args:
            gallery_id: Restrict to one gallery
            admin_id: Restrict to galleries owned by this admin
        """
        query = self.db.query(Selection.status, func.count(Selection.id))
        if admin_id is not None:
            query = query.join(Gallery, Selection.gallery_id == Gallery.id).filter(
                Gallery.admin_id == admin_id
            )
        if gallery_id is not None:
            query = query.filter(Selection.gallery_id == gallery_id)

        counts = {status.value: 0 for status in SelectionStatus}
        for status, count in query.group_by(Selection.status).all():
            counts[SelectionStatus(status).value] = count
        return counts

    def count_favorites(
        self,
        photo_id: Optional[UUID] = None,
        gallery_id: Optional[UUID] = None
    ) -> int:
        query = self.db.query(func.count(Favorite.id))
        if photo_id is not None:
            query = query.filter(Favorite.photo_id == photo_id)
        if gallery_id is not None:
            query = query.filter(Favorite.gallery_id == gallery_id)
        return query.scalar() or 0

    def count_unread_notifications(self, admin_id: UUID) -> int:
        return self.db.query(func.count(Notification.id)).join(
            Gallery, Notification.gallery_id == Gallery.id
        ).filter(
            Gallery.admin_id == admin_id,
            Notification.read.is_(False)
        ).scalar() or 0

    def get_dashboard_stats(self, admin_id: UUID) -> Dict[str, int]:
        """Totals across every gallery owned by ``admin_id``."""
        row = self.adapter.get(
            DASHBOARD_STATS_SQL,
            {
                "admin_id": admin_id,
                "pending": SelectionStatus.pending.name,
                "unread": False,
            },
            types={"admin_id": Uuid()},
        )
        return {key: int(value or 0) for key, value in (row or {}).items()}
