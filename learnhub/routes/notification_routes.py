from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
import logging

from learnhub.core.database import get_db
from learnhub.core.dependencies import get_current_user
from learnhub.core.errors import AuthRejection, ForbiddenError, NotFoundError
from learnhub.models.user_model import User
from learnhub.schemas import notification_schema as schemas
from learnhub.crud import notification_crud as crud

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[schemas.NotificationDisplay])
def read_my_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    The current user's notifications, newest first.
    """
    return crud.get_user_notifications(db, current_user.id, unread_only=unread_only)

@router.patch("/{notification_id}/read", response_model=schemas.NotificationDisplay)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    notification = crud.get_notification(db, notification_id)
    if not notification:
        raise NotFoundError("Notification not found")
    if notification.user_id != current_user.id:
        # No admin bypass
        logger.warning(f"User {current_user.username} tried to mark notification {notification.id} of user {notification.user_id} as read.")
        raise ForbiddenError("Not your notification", reason=AuthRejection.FORBIDDEN_OWNERSHIP)
    return crud.mark_notification_read(db, notification.id)
