"""Selection API endpoints.

Client routes need no login: the browser-generated ``client_identifier``
only partitions state, it is not an identity. Review routes require an
admin token.
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional
from uuid import UUID

from src.api.deps import get_current_admin, get_selection_service
from src.models.user import User
from src.schemas.selection import (
    ClientPhotoAction,
    ClientGalleryAction,
    BulkSelectionRequest,
    ToggleSelectionResponse,
    SelectionCountResponse,
    ToggleFavoriteResponse,
    MessageResponse,
    BulkReviewResponse,
    SelectionResponse,
    FavoriteResponse,
    ClientSelectionListResponse,
    ClientFavoriteListResponse,
    GallerySelectionsResponse,
)
from src.services.selection_service import SelectionService


router = APIRouter()


# =============================================================================
# Client routes
# =============================================================================

@router.post('/toggle', response_model=ToggleSelectionResponse)
def toggle_selection(
    body: ClientPhotoAction,
    service: SelectionService = Depends(get_selection_service)
):
    """
    Select or deselect a photo for a client.

    - **photo_id**: Photo to toggle
    - **gallery_id**: Gallery the photo belongs to
    - **client_identifier**: Browser-generated client key
    """
    result = service.toggle_selection(body.photo_id, body.gallery_id, body.client_identifier)
    return ToggleSelectionResponse(
        selected=result.selected,
        total_selected=result.total_selected,
        message='Photo selected' if result.selected else 'Photo deselected'
    )


@router.post('/select-all', response_model=SelectionCountResponse)
def select_all(
    body: ClientGalleryAction,
    service: SelectionService = Depends(get_selection_service)
):
    """Select every photo in the gallery; existing review decisions are kept."""
    total = service.select_all(body.gallery_id, body.client_identifier)
    return SelectionCountResponse(total_selected=total, message='All photos selected')


@router.post('/deselect-all', response_model=SelectionCountResponse)
def deselect_all(
    body: ClientGalleryAction,
    service: SelectionService = Depends(get_selection_service)
):
    """Remove every selection of the client in the gallery."""
    total = service.deselect_all(body.gallery_id, body.client_identifier)
    return SelectionCountResponse(total_selected=total, message='All photos deselected')


@router.post('/favorite', response_model=ToggleFavoriteResponse)
def toggle_favorite(
    body: ClientPhotoAction,
    service: SelectionService = Depends(get_selection_service)
):
    """Add or remove a photo from the client's favorites."""
    favorited = service.toggle_favorite(body.photo_id, body.gallery_id, body.client_identifier)
    return ToggleFavoriteResponse(
        favorited=favorited,
        message='Added to favorites' if favorited else 'Removed from favorites'
    )


@router.get('', response_model=ClientSelectionListResponse)
def get_client_selections(
    gallery_id: Optional[UUID] = Query(None),
    client_identifier: Optional[str] = Query(None),
    service: SelectionService = Depends(get_selection_service)
):
    """List the client's own selections in a gallery."""
    selections = service.list_client_selections(gallery_id, client_identifier)
    return ClientSelectionListResponse(
        selections=[SelectionResponse.from_model(s) for s in selections],
        count=len(selections)
    )


@router.get('/favorites', response_model=ClientFavoriteListResponse)
def get_client_favorites(
    gallery_id: Optional[UUID] = Query(None),
    client_identifier: Optional[str] = Query(None),
    service: SelectionService = Depends(get_selection_service)
):
    """List the client's favorites in a gallery."""
    favorites = service.list_client_favorites(gallery_id, client_identifier)
    return ClientFavoriteListResponse(
        favorites=[FavoriteResponse.from_model(f) for f in favorites],
        count=len(favorites)
    )


# =============================================================================
# Admin routes
# =============================================================================

@router.get('/gallery/{gallery_id}', response_model=GallerySelectionsResponse)
def get_gallery_selections(
    gallery_id: UUID,
    current_user: User = Depends(get_current_admin),
    service: SelectionService = Depends(get_selection_service)
):
    """All selections in a gallery the admin owns, newest first, grouped by client."""
    result = service.get_gallery_selections(gallery_id, current_user.id)
    return GallerySelectionsResponse(
        selections=[SelectionResponse.from_model(s) for s in result.selections],
        grouped_by_client={
            client: [SelectionResponse.from_model(s) for s in items]
            for client, items in result.grouped_by_client.items()
        },
        total=result.total
    )


@router.put('/{selection_id}/approve', response_model=MessageResponse)
def approve_selection(
    selection_id: UUID,
    current_user: User = Depends(get_current_admin),
    service: SelectionService = Depends(get_selection_service)
):
    service.approve(selection_id, current_user.id)
    return MessageResponse(message='Selection approved')


@router.put('/{selection_id}/reject', response_model=MessageResponse)
def reject_selection(
    selection_id: UUID,
    current_user: User = Depends(get_current_admin),
    service: SelectionService = Depends(get_selection_service)
):
    service.reject(selection_id, current_user.id)
    return MessageResponse(message='Selection rejected')


@router.post('/bulk-approve', response_model=BulkReviewResponse)
def bulk_approve(
    body: BulkSelectionRequest,
    current_user: User = Depends(get_current_admin),
    service: SelectionService = Depends(get_selection_service)
):
    """Approve a batch; fails as a whole if any id is not in the admin's galleries."""
    updated = service.bulk_approve(body.selection_ids, current_user.id)
    return BulkReviewResponse(message=f'{updated} selections approved', updated=updated)


@router.post('/bulk-reject', response_model=BulkReviewResponse)
def bulk_reject(
    body: BulkSelectionRequest,
    current_user: User = Depends(get_current_admin),
    service: SelectionService = Depends(get_selection_service)
):
    """Reject a batch; fails as a whole if any id is not in the admin's galleries."""
    updated = service.bulk_reject(body.selection_ids, current_user.id)
    return BulkReviewResponse(message=f'{updated} selections rejected', updated=updated)
