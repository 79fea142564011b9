"""
Shared test configuration
"""
import os

# Settings are read at import time
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import src.models  # noqa: F401
from src.core.security import create_access_token
from src.db.base import Base, build_engine
from src.models import User, Gallery, Photo, UserRole


def make_user(db, email, role=UserRole.admin, is_active=True):
    user = User(
        name=email.split("@")[0].title(),
        email=email,
        hashed_password="hashed",
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    return user


def make_gallery(db, admin, name="Smith Wedding", photo_count=3):
    """Gallery plus ``photo_count`` photos, committed."""
    gallery = Gallery(admin_id=admin.id, name=name)
    db.add(gallery)
    db.flush()

    photos = [
        Photo(
            gallery_id=gallery.id,
            filename=f"img_{i:04d}.jpg",
            original_name=f"IMG_{i:04d}.JPG",
            original_path=f"galleries/{gallery.id}/img_{i:04d}.jpg",
            thumbnail_path=f"galleries/{gallery.id}/thumb_{i:04d}.jpg",
        )
        for i in range(1, photo_count + 1)
    ]
    db.add_all(photos)
    db.commit()
    return gallery, photos


def token_for(user):
    return create_access_token({"sub": str(user.id)})


@pytest.fixture
def engine():
    """In-memory database shared by every session of one test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def admin(db_session):
    return make_user(db_session, "photographer@example.com")


@pytest.fixture
def other_admin(db_session):
    return make_user(db_session, "rival@example.com")


@pytest.fixture
def proofing_gallery(db_session, admin):
    return make_gallery(db_session, admin)


@pytest.fixture
def gallery(proofing_gallery):
    return proofing_gallery[0]


@pytest.fixture
def photos(proofing_gallery):
    return proofing_gallery[1]


@pytest.fixture
def foreign_gallery(db_session, other_admin):
    """Gallery owned by a different admin."""
    return make_gallery(db_session, other_admin, name="Jones Birthday", photo_count=1)


@pytest.fixture
def client_user(db_session):
    """Non-admin account."""
    return make_user(db_session, "guest@example.com", role=UserRole.client)


@pytest.fixture
def gallery_factory(db_session):
    def factory(admin, **kwargs):
        return make_gallery(db_session, admin, **kwargs)
    return factory


@pytest.fixture
def admin_token(admin):
    return token_for(admin)


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def other_auth_headers(other_admin):
    return {"Authorization": f"Bearer {token_for(other_admin)}"}


@pytest.fixture
def client_headers(client_user):
    return {"Authorization": f"Bearer {token_for(client_user)}"}
