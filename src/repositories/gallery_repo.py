"""Gallery and photo lookups used by the proofing workflow."""
from sqlalchemy.orm import Session
from typing import Optional, List
from uuid import UUID

from src.repositories.base import BaseRepository
from src.models.gallery import Gallery
from src.models.photo import Photo


class GalleryRepository(BaseRepository[Gallery]):
    """Read access to galleries and their photos.

    Gallery and photo CRUD lives outside this service; only the lookups the
    selection workflow needs are here.
    """

    def __init__(self, db: Session):
        super().__init__(Gallery, db)

    def get_owned(self, gallery_id: UUID, admin_id: UUID) -> Optional[Gallery]:
        """Gallery if it exists and belongs to ``admin_id``, else None."""
        return self.db.query(Gallery).filter(
            Gallery.id == gallery_id,
            Gallery.admin_id == admin_id
        ).first()

    def get_photo(self, photo_id: UUID) -> Optional[Photo]:
        return self.db.query(Photo).filter(Photo.id == photo_id).first()

    def get_photo_ids(self, gallery_id: UUID) -> List[UUID]:
        """Ids of every photo in the gallery, oldest upload first."""
        rows = self.db.query(Photo.id).filter(
            Photo.gallery_id == gallery_id
        ).order_by(Photo.created_at).all()
        return [row.id for row in rows]
