"""Favorite repository."""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from src.repositories.base import BaseRepository
from src.models.favorite import Favorite

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[Favorite]):
    """Repository for favorite markers. Does not commit."""

    def __init__(self, db: Session):
        super().__init__(Favorite, db)

    def get_for_client(self, photo_id: UUID, client_identifier: str) -> Optional[Favorite]:
        return self.get_by_fields(photo_id=photo_id, client_identifier=client_identifier)

    def insert(self, photo_id: UUID, gallery_id: UUID, client_identifier: str) -> Optional[Favorite]:
        """Insert in a SAVEPOINT; None if the (photo, client) row already exists."""
        favorite = Favorite(
            photo_id=photo_id,
            gallery_id=gallery_id,
            client_identifier=client_identifier,
        )
        try:
            with self.db.begin_nested():
                self.db.add(favorite)
        except IntegrityError:
            logger.info(
                f"Favorite for photo {photo_id} / client {client_identifier} already exists; "
                f"insert skipped"
            )
            return None
        return favorite

    def list_for_client(self, gallery_id: UUID, client_identifier: str) -> List[Favorite]:
        return self.db.query(Favorite).join(Favorite.photo).options(
            contains_eager(Favorite.photo)
        ).filter(
            Favorite.gallery_id == gallery_id,
            Favorite.client_identifier == client_identifier
        ).order_by(desc(Favorite.created_at)).all()
