"""
Services package initializer.

Re-exports the service classes so callers can import from `src.services`
instead of deep module paths.
"""

from .broadcaster import GalleryBroadcaster, build_event
from .notification_service import NotificationService
from .selection_service import SelectionService, ToggleResult, GallerySelections

__all__ = [
    "GalleryBroadcaster",
    "build_event",
    "NotificationService",
    "SelectionService",
    "ToggleResult",
    "GallerySelections",
]
