#!/usr/bin/env python
"""Seed a development database with an admin, a gallery and photos.

Prints the gallery id and an admin access token for trying the API and
the live channel by hand.
"""
import sys
from pathlib import Path
import hashlib

# Repo root on path so `src.*` resolves when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy.orm import Session
from src.core.security import create_access_token
from src.db.base import SessionLocal, init_db
from src.models import User, Gallery, Photo, UserRole


def hash_password(password: str) -> str:
    """Simple hash for development (use proper bcrypt in production)."""
    return hashlib.sha256(password.encode()).hexdigest()


def seed_admin(db: Session) -> User:
    admin = db.query(User).filter(User.email == "admin@proofing.test").first()
    if admin:
        print(f"  → Admin exists: {admin.email}")
        return admin

    admin = User(
        name="Studio Admin",
        email="admin@proofing.test",
        hashed_password=hash_password("admin123"),
        role=UserRole.admin,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    print(f"✅ Created admin: {admin.email}")
    return admin


def seed_gallery(db: Session, admin: User, photo_count: int = 12) -> Gallery:
    gallery = db.query(Gallery).filter(
        Gallery.admin_id == admin.id,
        Gallery.name == "Sample Wedding Proofs"
    ).first()
    if gallery:
        print(f"  → Gallery exists: {gallery.name}")
        return gallery

    gallery = Gallery(
        admin_id=admin.id,
        name="Sample Wedding Proofs",
        description="Pick your favourites for the album",
    )
    db.add(gallery)
    db.flush()

    for i in range(1, photo_count + 1):
        db.add(Photo(
            gallery_id=gallery.id,
            filename=f"img_{i:04d}.jpg",
            original_name=f"IMG_{i:04d}.JPG",
            original_path=f"galleries/{gallery.id}/original/img_{i:04d}.jpg",
            thumbnail_path=f"galleries/{gallery.id}/thumb/img_{i:04d}.jpg",
            width=6000,
            height=4000,
        ))

    db.commit()
    print(f"✅ Created gallery '{gallery.name}' with {photo_count} photos")
    return gallery


def main():
    init_db()
    db = SessionLocal()
    try:
        admin = seed_admin(db)
        gallery = seed_gallery(db, admin)
        token = create_access_token({"sub": str(admin.id), "type": "access"})

        print()
        print(f"Gallery id:   {gallery.id}")
        print(f"Admin token:  {token}")
        print(f"Live channel: ws://localhost:8000/ws?gallery={gallery.id}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
