"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from activity_tracker.core.security import decode_subject
from activity_tracker.core.settings import settings
from activity_tracker.db.session import get_db
from activity_tracker.models import User
from activity_tracker.services.content_service import ContentService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        user_id = decode_subject(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_tracker_admin(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    """Require the authenticated user to be a tracker administrator.

    Raises:
        HTTPException: If the user is not listed in ``TRACKER_ADMIN_USER_IDS``
    """
    if current_user.id not in settings.tracker_admin_user_ids:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tracker maintenance requires an administrator",
        )
    return current_user


def get_content_service(db: SessionDep) -> ContentService:
    """Return a content service bound to the request session."""
    return ContentService(db)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
TrackerAdminDep = Annotated[User, Depends(get_tracker_admin)]
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
