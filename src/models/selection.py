"""Client selection model."""
from sqlalchemy import Column, String, ForeignKey, Uuid, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid

from src.db.base import Base
from .base import TimestampMixin
from .enums import SelectionStatus


class Selection(Base, TimestampMixin):
    """A client's pick of a photo, reviewed by the gallery admin.

    At most one row per (photo, client); the constraint is what keeps
    concurrent toggles from double inserting.
    """

    __tablename__ = 'selections'
    __table_args__ = (
        UniqueConstraint('photo_id', 'client_identifier', name='uq_selections_photo_client'),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    photo_id = Column(Uuid(as_uuid=True), ForeignKey('photos.id', ondelete='CASCADE'), nullable=False, index=True)
    gallery_id = Column(Uuid(as_uuid=True), ForeignKey('galleries.id', ondelete='CASCADE'), nullable=False, index=True)
    client_identifier = Column(String(255), nullable=False, index=True)
    status = Column(SQLEnum(SelectionStatus), default=SelectionStatus.pending, nullable=False, index=True)

    # Relationships
    photo = relationship('Photo', back_populates='selections')
    gallery = relationship('Gallery')

    def __repr__(self) -> str:
        return f'<Selection(id={self.id}, photo_id={self.photo_id}, status={self.status})>'
