"""Selection repository: row-level access for client picks."""
import logging
from typing import Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from src.repositories.base import BaseRepository
from src.models.enums import SelectionStatus
from src.models.gallery import Gallery
from src.models.selection import Selection

logger = logging.getLogger(__name__)


class SelectionRepository(BaseRepository[Selection]):
    """Repository for selection rows.

    Nothing here commits; the service decides where the transaction ends.
    """

    def __init__(self, db: Session):
        super().__init__(Selection, db)

    def get_for_client(self, photo_id: UUID, client_identifier: str) -> Optional[Selection]:
        """The (photo, client) row, if any."""
        return self.get_by_fields(photo_id=photo_id, client_identifier=client_identifier)

    def insert_pending(
        self,
        photo_id: UUID,
        gallery_id: UUID,
        client_identifier: str
    ) -> Optional[Selection]:
        """
        Insert a pending selection inside a SAVEPOINT.

        Returns:
            The new row, or None when the unique (photo, client) constraint
            rejected it because another writer got there first. Only the
            savepoint is rolled back, the outer transaction stays usable.
        """
        selection = Selection(
            photo_id=photo_id,
            gallery_id=gallery_id,
            client_identifier=client_identifier,
            status=SelectionStatus.pending,
        )
        try:
            with self.db.begin_nested():
                self.db.add(selection)
        except IntegrityError:
            logger.info(
                f"Selection for photo {photo_id} / client {client_identifier} already exists; "
                f"insert skipped"
            )
            return None
        return selection

    def existing_photo_ids(self, gallery_id: UUID, client_identifier: str) -> Set[UUID]:
        rows = self.db.query(Selection.photo_id).filter(
            Selection.gallery_id == gallery_id,
            Selection.client_identifier == client_identifier
        ).all()
        return {row.photo_id for row in rows}

    def delete_for_client(self, gallery_id: UUID, client_identifier: str) -> int:
        """Delete every row of a client in a gallery, whatever its status."""
        return self.db.query(Selection).filter(
            Selection.gallery_id == gallery_id,
            Selection.client_identifier == client_identifier
        ).delete(synchronize_session=False)

    def get_owned(self, selection_id: UUID, admin_id: UUID) -> Optional[Selection]:
        """Selection whose gallery belongs to ``admin_id``, else None."""
        return self.db.query(Selection).join(
            Gallery, Selection.gallery_id == Gallery.id
        ).filter(
            Selection.id == selection_id,
            Gallery.admin_id == admin_id
        ).first()

    def get_owned_ids(self, selection_ids: Iterable[UUID], admin_id: UUID) -> Set[UUID]:
        """Subset of ``selection_ids`` that live in galleries owned by ``admin_id``."""
        ids = list(selection_ids)
        if not ids:
            return set()
        rows = self.db.query(Selection.id).join(
            Gallery, Selection.gallery_id == Gallery.id
        ).filter(
            Selection.id.in_(ids),
            Gallery.admin_id == admin_id
        ).all()
        return {row.id for row in rows}

    def set_status(self, selection_ids: Iterable[UUID], status: SelectionStatus) -> int:
        """Overwrite status for the given ids; returns rows updated."""
        ids = list(selection_ids)
        if not ids:
            return 0
        return self.db.query(Selection).filter(
            Selection.id.in_(ids)
        ).update({Selection.status: status}, synchronize_session=False)

    def list_for_client(self, gallery_id: UUID, client_identifier: str) -> List[Selection]:
        """Client's selections with their photo eagerly loaded."""
        return self.db.query(Selection).join(Selection.photo).options(
            contains_eager(Selection.photo)
        ).filter(
            Selection.gallery_id == gallery_id,
            Selection.client_identifier == client_identifier
        ).order_by(desc(Selection.created_at)).all()

    def list_for_gallery(self, gallery_id: UUID) -> List[Selection]:
        """Every selection in a gallery, newest first, photo loaded."""
        return self.db.query(Selection).join(Selection.photo).options(
            contains_eager(Selection.photo)
        ).filter(
            Selection.gallery_id == gallery_id
        ).order_by(desc(Selection.created_at)).all()
