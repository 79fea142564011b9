"""
Selection workflow: client picks, favorites and admin review.

Each client mutation commits first; notification and live broadcast run
afterwards as post-commit hooks whose failures are logged and never undo
or fail the mutation.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from src.app.exceptions import DatabaseError, NotFoundError, ValidationError
from src.models.enums import NotificationType, SelectionStatus
from src.models.favorite import Favorite
from src.models.photo import Photo
from src.models.selection import Selection
from src.repositories.favorite_repo import FavoriteRepository
from src.repositories.gallery_repo import GalleryRepository
from src.repositories.selection_repo import SelectionRepository
from src.repositories.stats_repo import StatsRepository
from src.services.broadcaster import GalleryBroadcaster, build_event
from src.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class ToggleResult:
    selected: bool
    total_selected: int


@dataclass
class GallerySelections:
    selections: List[Selection]
    grouped_by_client: Dict[str, List[Selection]]
    total: int


class SelectionService:
    """Applies client and admin actions to selection/favorite state."""

    def __init__(
        self,
        db: Session,
        broadcaster: Optional[GalleryBroadcaster] = None,
        notifications: Optional[NotificationService] = None
    ):
        self.db = db
        self.broadcaster = broadcaster
        self.notifications = notifications or NotificationService(db)
        self.selections = SelectionRepository(db)
        self.favorites = FavoriteRepository(db)
        self.galleries = GalleryRepository(db)
        self.stats = StatsRepository(db)
        self._post_commit: List[Callable[[], Any]] = []

    # ------------------------------------------------------------------
    # Client actions
    # ------------------------------------------------------------------

    def toggle_selection(
        self,
        photo_id: Optional[UUID],
        gallery_id: Optional[UUID],
        client_identifier: Optional[str]
    ) -> ToggleResult:
        """
        Select the photo if the client has not, deselect it otherwise.

        Deselecting deletes the row whatever its review status. When a
        concurrent toggle inserts the same row first, this call finishes
        as a no-op that reports the photo as selected.
        """
        self._require(photo_id=photo_id, gallery_id=gallery_id, client_identifier=client_identifier)
        photo = self._get_photo_in_gallery(photo_id, gallery_id)

        with self._transaction("toggle selection"):
            existing = self.selections.get_for_client(photo_id, client_identifier)
            if existing:
                self.selections.delete_obj(existing, commit=False)
                selected = False
                self._after_commit(self._publish, gallery_id, build_event(
                    "selection", gallery_id,
                    photo_id=photo_id, client_identifier=client_identifier, action="remove",
                ))
            elif self.selections.insert_pending(photo_id, gallery_id, client_identifier):
                selected = True
                self._after_commit(
                    self._notify, gallery_id, NotificationType.selection,
                    f"Photo selected: {photo.original_name}",
                    {"photo_id": str(photo_id), "client_identifier": client_identifier},
                )
                self._after_commit(self._publish, gallery_id, build_event(
                    "selection", gallery_id,
                    photo_id=photo_id, client_identifier=client_identifier, action="add",
                ))
            else:
                # Lost the insert race: the row now exists, which is the
                # state this toggle would have produced.
                selected = True

        total = self.stats.count_client_selections(gallery_id, client_identifier)
        self._run_post_commit()

        logger.info(
            f"Client {client_identifier} {'selected' if selected else 'deselected'} "
            f"photo {photo_id} in gallery {gallery_id} (total {total})"
        )
        return ToggleResult(selected=selected, total_selected=total)

    def select_all(self, gallery_id: Optional[UUID], client_identifier: Optional[str]) -> int:
        """
        Add a pending selection for every photo the client has not picked.

        Existing rows keep their status. Returns the client's new total.
        """
        self._require(gallery_id=gallery_id, client_identifier=client_identifier)
        self._get_gallery(gallery_id)

        with self._transaction("select all"):
            photo_ids = self.galleries.get_photo_ids(gallery_id)
            already = self.selections.existing_photo_ids(gallery_id, client_identifier)
            added = 0
            for photo_id in photo_ids:
                if photo_id in already:
                    continue
                if self.selections.insert_pending(photo_id, gallery_id, client_identifier):
                    added += 1

        total = self.stats.count_client_selections(gallery_id, client_identifier)

        self._after_commit(
            self._notify, gallery_id, NotificationType.select_all,
            f"All {len(photo_ids)} photos selected",
            {"client_identifier": client_identifier, "added": added},
        )
        self._after_commit(self._publish, gallery_id, build_event(
            "select_all", gallery_id, client_identifier=client_identifier, count=len(photo_ids),
        ))
        self._run_post_commit()

        logger.info(f"Client {client_identifier} selected all in gallery {gallery_id} ({added} new, total {total})")
        return total

    def deselect_all(self, gallery_id: Optional[UUID], client_identifier: Optional[str]) -> int:
        """Delete every selection of the client in the gallery, approved and rejected included."""
        self._require(gallery_id=gallery_id, client_identifier=client_identifier)
        self._get_gallery(gallery_id)

        with self._transaction("deselect all"):
            removed = self.selections.delete_for_client(gallery_id, client_identifier)

        self._after_commit(
            self._notify, gallery_id, NotificationType.deselect_all,
            "All photos deselected",
            {"client_identifier": client_identifier, "removed": removed},
        )
        self._after_commit(self._publish, gallery_id, build_event(
            "deselect_all", gallery_id, client_identifier=client_identifier,
        ))
        self._run_post_commit()

        logger.info(f"Client {client_identifier} deselected all in gallery {gallery_id} ({removed} removed)")
        return 0

    def toggle_favorite(
        self,
        photo_id: Optional[UUID],
        gallery_id: Optional[UUID],
        client_identifier: Optional[str]
    ) -> bool:
        """Add or remove the client's favorite marker; returns the new state."""
        self._require(photo_id=photo_id, gallery_id=gallery_id, client_identifier=client_identifier)
        photo = self._get_photo_in_gallery(photo_id, gallery_id)

        with self._transaction("toggle favorite"):
            existing = self.favorites.get_for_client(photo_id, client_identifier)
            if existing:
                self.favorites.delete_obj(existing, commit=False)
                favorited = False
                self._after_commit(self._publish, gallery_id, build_event(
                    "favorite", gallery_id,
                    photo_id=photo_id, client_identifier=client_identifier, action="remove",
                ))
            elif self.favorites.insert(photo_id, gallery_id, client_identifier):
                favorited = True
                self._after_commit(
                    self._notify, gallery_id, NotificationType.favorite,
                    f"Photo favorited: {photo.original_name}",
                    {"photo_id": str(photo_id), "client_identifier": client_identifier},
                )
                self._after_commit(self._publish, gallery_id, build_event(
                    "favorite", gallery_id,
                    photo_id=photo_id, client_identifier=client_identifier, action="add",
                ))
            else:
                favorited = True

        self._run_post_commit()
        return favorited

    def list_client_selections(self, gallery_id: Optional[UUID], client_identifier: Optional[str]) -> List[Selection]:
        self._require(gallery_id=gallery_id, client_identifier=client_identifier)
        return self.selections.list_for_client(gallery_id, client_identifier)

    def list_client_favorites(self, gallery_id: Optional[UUID], client_identifier: Optional[str]) -> List[Favorite]:
        self._require(gallery_id=gallery_id, client_identifier=client_identifier)
        return self.favorites.list_for_client(gallery_id, client_identifier)

    # ------------------------------------------------------------------
    # Admin review
    # ------------------------------------------------------------------

    def approve(self, selection_id: UUID, admin_id: UUID) -> Selection:
        return self._review(selection_id, admin_id, SelectionStatus.approved)

    def reject(self, selection_id: UUID, admin_id: UUID) -> Selection:
        return self._review(selection_id, admin_id, SelectionStatus.rejected)

    def bulk_approve(self, selection_ids: Sequence[UUID], admin_id: UUID) -> int:
        return self._bulk_review(selection_ids, admin_id, SelectionStatus.approved)

    def bulk_reject(self, selection_ids: Sequence[UUID], admin_id: UUID) -> int:
        return self._bulk_review(selection_ids, admin_id, SelectionStatus.rejected)

    def get_gallery_selections(self, gallery_id: UUID, admin_id: UUID) -> GallerySelections:
        """All selections of an owned gallery, newest first, grouped by client."""
        if not self.galleries.get_owned(gallery_id, admin_id):
            raise NotFoundError("Gallery", gallery_id)

        selections = self.selections.list_for_gallery(gallery_id)
        grouped: Dict[str, List[Selection]] = {}
        for selection in selections:
            grouped.setdefault(selection.client_identifier, []).append(selection)

        return GallerySelections(selections=selections, grouped_by_client=grouped, total=len(selections))

    def _review(self, selection_id: UUID, admin_id: UUID, status: SelectionStatus) -> Selection:
        """Overwrite status of one selection in a gallery the admin owns."""
        selection = self.selections.get_owned(selection_id, admin_id)
        if not selection:
            raise NotFoundError("Selection", selection_id)

        # The client may unselect between lookup and commit
        gone = NotFoundError("Selection", selection_id)
        with self._transaction(f"mark selection {status.value}", gone=gone):
            selection.status = status

        logger.info(f"Admin {admin_id} marked selection {selection_id} {status.value}")
        return selection

    def _bulk_review(self, selection_ids: Sequence[UUID], admin_id: UUID, status: SelectionStatus) -> int:
        """
        Overwrite status for a batch, all or nothing.

        Every id must belong to a gallery owned by the admin; one foreign or
        unknown id rejects the whole batch with the same not-found error the
        single-item variant gives.
        """
        if not selection_ids:
            raise ValidationError("Selection IDs array required", field="selection_ids")

        ids = list(dict.fromkeys(selection_ids))
        owned = self.selections.get_owned_ids(ids, admin_id)
        missing = [selection_id for selection_id in ids if selection_id not in owned]
        if missing:
            logger.warning(
                f"Admin {admin_id} bulk {status.value} rejected: {len(missing)} of {len(ids)} ids not owned"
            )
            raise NotFoundError("Selection", missing[0], context={"missing": [str(m) for m in missing]})

        with self._transaction(f"bulk mark {status.value}"):
            updated = self.selections.set_status(ids, status)

        logger.info(f"Admin {admin_id} marked {updated} selections {status.value}")
        return updated

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require(**fields: Any) -> None:
        for name, value in fields.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError("Missing required fields", field=name)

    def _get_gallery(self, gallery_id: UUID):
        gallery = self.galleries.get(gallery_id)
        if not gallery:
            raise NotFoundError("Gallery", gallery_id)
        return gallery

    def _get_photo_in_gallery(self, photo_id: UUID, gallery_id: UUID) -> Photo:
        photo = self.galleries.get_photo(photo_id)
        if not photo or photo.gallery_id != gallery_id:
            raise NotFoundError("Photo", photo_id)
        return photo

    def _transaction(self, action: str, gone: Optional[Exception] = None) -> "_LedgerTransaction":
        return _LedgerTransaction(self, action, gone=gone)

    def _after_commit(self, hook: Callable[..., Any], *args: Any) -> None:
        self._post_commit.append(lambda: hook(*args))

    def _run_post_commit(self) -> None:
        hooks, self._post_commit = self._post_commit, []
        for hook in hooks:
            try:
                hook()
            except Exception:
                logger.exception("Post-commit hook failed; mutation already committed")

    def _notify(self, gallery_id: UUID, type: NotificationType, message: str, payload: Dict[str, Any]) -> None:
        self.notifications.emit(gallery_id, type, message, payload)

    def _publish(self, gallery_id: UUID, event: Dict[str, Any]) -> None:
        if self.broadcaster is not None:
            self.broadcaster.publish(gallery_id, event)


class _LedgerTransaction:
    """
    Commit on success, roll back on failure.

    Storage errors become DatabaseError, except a flush whose row was
    already deleted, which raises ``gone`` when one is given. Hooks queued
    inside a failed block are discarded with the rollback.
    """

    def __init__(self, service: SelectionService, action: str, gone: Optional[Exception] = None):
        self.service = service
        self.action = action
        self.gone = gone

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        db = self.service.db
        if exc_type is None:
            try:
                db.commit()
                return False
            except SQLAlchemyError as e:
                exc = e

        db.rollback()
        self.service._post_commit.clear()
        if isinstance(exc, StaleDataError) and self.gone is not None:
            logger.info(f"Failed to {self.action}: row removed concurrently")
            raise self.gone from exc
        if isinstance(exc, SQLAlchemyError):
            logger.error(f"Failed to {self.action}: {exc}", exc_info=exc)
            raise DatabaseError(context={"action": self.action}) from exc
        return False
