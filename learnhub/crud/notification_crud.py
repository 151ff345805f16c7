from sqlalchemy.orm import Session
from sqlalchemy import func
import logging
from typing import List, Optional

from learnhub.models.notification_model import Notification
from learnhub.schemas import notification_schema as schemas

logger = logging.getLogger(__name__)

def create_notification(db: Session, notification_in: schemas.NotificationCreate) -> Notification:
    logger.debug(f"Creating {notification_in.type.value} notification for user_id {notification_in.user_id}")
    db_notification = Notification(**notification_in.model_dump(), read=False)
    db.add(db_notification)
    db.commit()
    db.refresh(db_notification)
    logger.info(f"Notification ID {db_notification.id} ('{db_notification.title}') created for user {db_notification.user_id}.")
    return db_notification

def get_notification(db: Session, notification_id: int) -> Optional[Notification]:
    logger.debug(f"Fetching notification with ID: {notification_id}")
    return db.query(Notification).filter(Notification.id == notification_id).first()

def get_user_notifications(db: Session, user_id: int, unread_only: bool = False) -> List[Notification]:
    logger.debug(f"Fetching notifications for user_id {user_id} (unread_only: {unread_only})")
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.read.is_(False))
    return query.order_by(Notification.id.desc()).all()

def count_unread(db: Session, user_id: int) -> int:
    return db.query(func.count(Notification.id)).filter(
        Notification.user_id == user_id,
        Notification.read.is_(False)
    ).scalar() or 0

def mark_notification_read(db: Session, notification_id: int) -> Optional[Notification]:
    db_notification = get_notification(db, notification_id)
    if not db_notification:
        logger.warning(f"Notification with ID {notification_id} not found.")
        return None
    db_notification.read = True
    db.commit()
    db.refresh(db_notification)
    logger.debug(f"Notification ID {notification_id} marked as read.")
    return db_notification
