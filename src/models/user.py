"""User model."""
from sqlalchemy import Column, String, Boolean, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid

from src.db.base import Base
from .base import TimestampMixin
from .enums import UserRole


class User(Base, TimestampMixin):
    """Photographer (admin) or client account."""

    __tablename__ = 'users'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), default=UserRole.client, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    galleries = relationship('Gallery', back_populates='admin', cascade='all, delete-orphan')

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    def __repr__(self) -> str:
        return f'<User(id={self.id}, email={self.email}, role={self.role})>'
