"""Gallery model."""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid
import secrets

from src.db.base import Base
from .base import TimestampMixin
from .enums import GalleryStatus


class Gallery(Base, TimestampMixin):
    """Shared proofing gallery owned by one admin."""

    __tablename__ = 'galleries'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    admin_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Sharing / access policy
    share_link = Column(String(64), unique=True, nullable=False, index=True, default=lambda: secrets.token_urlsafe(16))
    password = Column(String(255), nullable=True)  # hashed by the auth layer
    expiry_date = Column(DateTime, nullable=True)
    allow_download = Column(Boolean, default=True, nullable=False)
    allow_bulk_download = Column(Boolean, default=True, nullable=False)
    allow_client_upload = Column(Boolean, default=False, nullable=False)
    status = Column(SQLEnum(GalleryStatus), default=GalleryStatus.active, nullable=False, index=True)

    # Relationships
    admin = relationship('User', back_populates='galleries')
    photos = relationship('Photo', back_populates='gallery', cascade='all, delete-orphan', passive_deletes=True)
    notifications = relationship('Notification', back_populates='gallery', cascade='all, delete-orphan', passive_deletes=True)

    def __repr__(self) -> str:
        return f'<Gallery(id={self.id}, name={self.name}, status={self.status})>'
