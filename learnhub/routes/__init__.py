# This file makes the 'routes' directory a Python package.

from fastapi import APIRouter

from .auth_routes import router as auth_router
from .course_routes import router as course_router
from .learning_routes import router as learning_router
from .assignment_routes import router as assignment_router
from .discussion_routes import router as discussion_router
from .notification_routes import router as notification_router
from .referral_routes import router as referral_router
from .admin_routes import router as admin_router
from .upload_routes import router as upload_router

# Main API router; create_app mounts it under settings.API_PREFIX
api_router = APIRouter()

# User-facing routes
api_router.include_router(auth_router)
api_router.include_router(course_router)
api_router.include_router(learning_router)
api_router.include_router(assignment_router)
api_router.include_router(discussion_router)
api_router.include_router(notification_router)
api_router.include_router(referral_router)

# Admin routes - these are already prefixed with /admin in admin_routes.py
# So admin routes end up at {API_PREFIX}/admin/...
api_router.include_router(admin_router)

__all__ = [
    "api_router", # Export the main router
    "upload_router", # Mounted separately under the uploads URL prefix
]
