"""Admin dashboard counts."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID

from src.api.deps import get_db, get_current_admin
from src.app.exceptions import NotFoundError
from src.models.user import User
from src.repositories.gallery_repo import GalleryRepository
from src.repositories.stats_repo import StatsRepository
from src.schemas.notification import DashboardStatsResponse, GalleryStatsResponse


router = APIRouter()


@router.get('', response_model=DashboardStatsResponse)
def get_dashboard_stats(
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Totals across every gallery the admin owns."""
    return DashboardStatsResponse(**StatsRepository(db).get_dashboard_stats(current_user.id))


@router.get('/gallery/{gallery_id}', response_model=GalleryStatsResponse)
def get_gallery_stats(
    gallery_id: UUID,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Selection status and favorite counts for one owned gallery."""
    if not GalleryRepository(db).get_owned(gallery_id, current_user.id):
        raise NotFoundError("Gallery", gallery_id)

    stats = StatsRepository(db)
    return GalleryStatsResponse(
        gallery_id=gallery_id,
        favorites=stats.count_favorites(gallery_id=gallery_id),
        **stats.count_by_status(gallery_id=gallery_id)
    )
