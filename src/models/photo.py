"""Photo model."""
from sqlalchemy import Column, String, Integer, BigInteger, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid

from src.db.base import Base
from .base import TimestampMixin


class Photo(Base, TimestampMixin):
    """Uploaded photo; storage and rendering are handled elsewhere."""

    __tablename__ = 'photos'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    gallery_id = Column(Uuid(as_uuid=True), ForeignKey('galleries.id', ondelete='CASCADE'), nullable=False, index=True)

    # Storage locators
    filename = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    original_path = Column(String(512), nullable=False)
    thumbnail_path = Column(String(512), nullable=True)
    watermarked_path = Column(String(512), nullable=True)

    # File metadata
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    size = Column(BigInteger, nullable=True)
    mime_type = Column(String(100), nullable=True, default='image/jpeg')
    tags = Column(String, nullable=True)  # JSON list stored as string

    # Relationships
    gallery = relationship('Gallery', back_populates='photos')
    selections = relationship('Selection', back_populates='photo', cascade='all, delete-orphan', passive_deletes=True)
    favorites = relationship('Favorite', back_populates='photo', cascade='all, delete-orphan', passive_deletes=True)

    def __repr__(self) -> str:
        return f'<Photo(id={self.id}, filename={self.filename})>'
