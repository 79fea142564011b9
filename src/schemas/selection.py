"""Selection and favorite schemas for API requests and responses."""
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from uuid import UUID
from typing import Optional, List, Dict

from src.models.enums import SelectionStatus


class ClientPhotoAction(BaseModel):
    """Body of toggle and favorite requests.

    Fields are optional at the schema level so a missing one is reported
    by the service as a plain validation error.
    """
    photo_id: Optional[UUID] = None
    gallery_id: Optional[UUID] = None
    client_identifier: Optional[str] = Field(None, max_length=255)


class ClientGalleryAction(BaseModel):
    """Body of select-all and deselect-all requests."""
    gallery_id: Optional[UUID] = None
    client_identifier: Optional[str] = Field(None, max_length=255)


class BulkSelectionRequest(BaseModel):
    """Selection ids for a bulk review."""
    selection_ids: List[UUID] = Field(default_factory=list)


class ToggleSelectionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    selected: bool
    total_selected: int = Field(..., alias="totalSelected")
    message: str


class SelectionCountResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_selected: int = Field(..., alias="totalSelected")
    message: str


class ToggleFavoriteResponse(BaseModel):
    favorited: bool
    message: str


class MessageResponse(BaseModel):
    message: str


class BulkReviewResponse(BaseModel):
    message: str
    updated: int


class SelectionResponse(BaseModel):
    """A selection with the file details of its photo."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    photo_id: UUID
    gallery_id: UUID
    client_identifier: str
    status: SelectionStatus
    created_at: datetime
    updated_at: datetime

    filename: Optional[str] = None
    original_name: Optional[str] = None
    thumbnail_path: Optional[str] = None

    @classmethod
    def from_model(cls, selection) -> "SelectionResponse":
        photo = selection.photo
        return cls(
            id=selection.id,
            photo_id=selection.photo_id,
            gallery_id=selection.gallery_id,
            client_identifier=selection.client_identifier,
            status=selection.status,
            created_at=selection.created_at,
            updated_at=selection.updated_at,
            filename=photo.filename if photo else None,
            original_name=photo.original_name if photo else None,
            thumbnail_path=photo.thumbnail_path if photo else None,
        )


class FavoriteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    photo_id: UUID
    gallery_id: UUID
    client_identifier: str
    created_at: datetime

    filename: Optional[str] = None
    original_name: Optional[str] = None
    thumbnail_path: Optional[str] = None

    @classmethod
    def from_model(cls, favorite) -> "FavoriteResponse":
        photo = favorite.photo
        return cls(
            id=favorite.id,
            photo_id=favorite.photo_id,
            gallery_id=favorite.gallery_id,
            client_identifier=favorite.client_identifier,
            created_at=favorite.created_at,
            filename=photo.filename if photo else None,
            original_name=photo.original_name if photo else None,
            thumbnail_path=photo.thumbnail_path if photo else None,
        )


class ClientSelectionListResponse(BaseModel):
    selections: List[SelectionResponse]
    count: int


class ClientFavoriteListResponse(BaseModel):
    favorites: List[FavoriteResponse]
    count: int


class GallerySelectionsResponse(BaseModel):
    """Admin view of every selection in a gallery."""
    selections: List[SelectionResponse]
    grouped_by_client: Dict[str, List[SelectionResponse]]
    total: int
