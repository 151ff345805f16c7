# This package contains business logic that spans several repositories.

from . import notification_service
from . import rewards_service
from . import storage_service

__all__ = [
    "notification_service",
    "rewards_service",
    "storage_service",
]
