"""Client favorite model."""
from sqlalchemy import Column, String, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from src.db.base import Base
from .base import TimestampMixin


class Favorite(Base, TimestampMixin):
    """Unmoderated 'like' marker, one per (photo, client)."""

    __tablename__ = 'favorites'
    __table_args__ = (
        UniqueConstraint('photo_id', 'client_identifier', name='uq_favorites_photo_client'),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    photo_id = Column(Uuid(as_uuid=True), ForeignKey('photos.id', ondelete='CASCADE'), nullable=False, index=True)
    gallery_id = Column(Uuid(as_uuid=True), ForeignKey('galleries.id', ondelete='CASCADE'), nullable=False, index=True)
    client_identifier = Column(String(255), nullable=False, index=True)

    # Relationships
    photo = relationship('Photo', back_populates='favorites')

    def __repr__(self) -> str:
        return f'<Favorite(id={self.id}, photo_id={self.photo_id})>'
