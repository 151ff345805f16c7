from typing import Optional
from datetime import datetime

from learnhub.models.enums import NotificationType
from learnhub.schemas.base_schema import CamelModel

class NotificationCreate(CamelModel):
    user_id: int
    title: str
    message: str
    type: NotificationType = NotificationType.SYSTEM

class NotificationDisplay(NotificationCreate):
    id: int
    read: bool
    created_at: Optional[datetime] = None
