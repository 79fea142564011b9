"""Proofing core tables

Revision ID: 0001_proofing_core
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_proofing_core'
down_revision = None
branch_labels = None
depends_on = None


user_role = sa.Enum('admin', 'client', name='userrole')
gallery_status = sa.Enum('active', 'expired', 'archived', name='gallerystatus')
selection_status = sa.Enum('pending', 'approved', 'rejected', name='selectionstatus')
notification_type = sa.Enum('selection', 'favorite', 'select_all', 'deselect_all', name='notificationtype')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'galleries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('admin_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('share_link', sa.String(length=64), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.Column('expiry_date', sa.DateTime(), nullable=True),
        sa.Column('allow_download', sa.Boolean(), nullable=False),
        sa.Column('allow_bulk_download', sa.Boolean(), nullable=False),
        sa.Column('allow_client_upload', sa.Boolean(), nullable=False),
        sa.Column('status', gallery_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['admin_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_galleries_id', 'galleries', ['id'])
    op.create_index('ix_galleries_admin_id', 'galleries', ['admin_id'])
    op.create_index('ix_galleries_share_link', 'galleries', ['share_link'], unique=True)
    op.create_index('ix_galleries_status', 'galleries', ['status'])
    op.create_index('ix_galleries_created_at', 'galleries', ['created_at'])

    op.create_table(
        'photos',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('gallery_id', sa.Uuid(), nullable=False),
        sa.Column('filename', sa.String(length=255), nullable=False),
        sa.Column('original_name', sa.String(length=255), nullable=False),
        sa.Column('original_path', sa.String(length=512), nullable=False),
        sa.Column('thumbnail_path', sa.String(length=512), nullable=True),
        sa.Column('watermarked_path', sa.String(length=512), nullable=True),
        sa.Column('width', sa.Integer(), nullable=True),
        sa.Column('height', sa.Integer(), nullable=True),
        sa.Column('size', sa.BigInteger(), nullable=True),
        sa.Column('mime_type', sa.String(length=100), nullable=True),
        sa.Column('tags', sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['gallery_id'], ['galleries.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_photos_id', 'photos', ['id'])
    op.create_index('ix_photos_gallery_id', 'photos', ['gallery_id'])
    op.create_index('ix_photos_created_at', 'photos', ['created_at'])

    op.create_table(
        'selections',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('photo_id', sa.Uuid(), nullable=False),
        sa.Column('gallery_id', sa.Uuid(), nullable=False),
        sa.Column('client_identifier', sa.String(length=255), nullable=False),
        sa.Column('status', selection_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['photo_id'], ['photos.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['gallery_id'], ['galleries.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('photo_id', 'client_identifier', name='uq_selections_photo_client'),
    )
    op.create_index('ix_selections_id', 'selections', ['id'])
    op.create_index('ix_selections_photo_id', 'selections', ['photo_id'])
    op.create_index('ix_selections_gallery_id', 'selections', ['gallery_id'])
    op.create_index('ix_selections_client_identifier', 'selections', ['client_identifier'])
    op.create_index('ix_selections_status', 'selections', ['status'])
    op.create_index('ix_selections_created_at', 'selections', ['created_at'])

    op.create_table(
        'favorites',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('photo_id', sa.Uuid(), nullable=False),
        sa.Column('gallery_id', sa.Uuid(), nullable=False),
        sa.Column('client_identifier', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['photo_id'], ['photos.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['gallery_id'], ['galleries.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('photo_id', 'client_identifier', name='uq_favorites_photo_client'),
    )
    op.create_index('ix_favorites_id', 'favorites', ['id'])
    op.create_index('ix_favorites_photo_id', 'favorites', ['photo_id'])
    op.create_index('ix_favorites_gallery_id', 'favorites', ['gallery_id'])
    op.create_index('ix_favorites_client_identifier', 'favorites', ['client_identifier'])
    op.create_index('ix_favorites_created_at', 'favorites', ['created_at'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('gallery_id', sa.Uuid(), nullable=False),
        sa.Column('type', notification_type, nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('read', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['gallery_id'], ['galleries.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_id', 'notifications', ['id'])
    op.create_index('ix_notifications_gallery_id', 'notifications', ['gallery_id'])
    op.create_index('ix_notifications_read', 'notifications', ['read'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('favorites')
    op.drop_table('selections')
    op.drop_table('photos')
    op.drop_table('galleries')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (notification_type, selection_status, gallery_status, user_role):
        enum_type.drop(bind, checkfirst=True)
