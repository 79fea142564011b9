"""Gallery notification model."""
from sqlalchemy import Column, String, Boolean, ForeignKey, Text, Uuid, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid

from src.db.base import Base
from .base import TimestampMixin
from .enums import NotificationType


class Notification(Base, TimestampMixin):
    """Append-only event log entry shown to the gallery admin."""

    __tablename__ = 'notifications'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    gallery_id = Column(Uuid(as_uuid=True), ForeignKey('galleries.id', ondelete='CASCADE'), nullable=False, index=True)
    type = Column(SQLEnum(NotificationType), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, nullable=True)
    read = Column(Boolean, default=False, nullable=False, index=True)

    # Relationships
    gallery = relationship('Gallery', back_populates='notifications')

    def __repr__(self) -> str:
        return f'<Notification(id={self.id}, type={self.type}, read={self.read})>'
