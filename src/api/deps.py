"""Dependencies for API endpoints."""
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from src.db.base import get_db
from src.models.user import User
from src.core.security import get_token_subject
from src.services.broadcaster import GalleryBroadcaster
from src.services.notification_service import NotificationService
from src.services.selection_service import SelectionService

security = HTTPBearer()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """User named by the bearer access token; must exist and be active."""
    user_id = get_token_subject(credentials.credentials)
    user = db.query(User).filter(User.id == user_id).first() if user_id else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    return user


def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """Verify user is an admin."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user


def get_broadcaster(request: Request) -> GalleryBroadcaster:
    """The process-wide broadcaster created in the app lifespan."""
    return request.app.state.broadcaster


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def get_selection_service(
    db: Session = Depends(get_db),
    broadcaster: GalleryBroadcaster = Depends(get_broadcaster),
) -> SelectionService:
    return SelectionService(db, broadcaster=broadcaster)
