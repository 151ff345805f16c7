from fastapi import Depends, Request
from sqlalchemy.orm import Session
import logging

from learnhub.core.database import get_db # Re-export or use directly
from learnhub.core.errors import NotAuthenticatedError, NotFoundError
from learnhub.core.security import get_session_user_id
from learnhub.core import permissions
from learnhub.crud.user_crud import get_user_by_id
from learnhub.crud.course_crud import get_course
from learnhub.crud.enrollment_crud import get_enrollment
from learnhub.models.enums import UserRole
from learnhub.models.user_model import User
from learnhub.models.course_model import Course # For type hinting

logger = logging.getLogger(__name__)


def get_settings(request: Request):
    return request.app.state.settings


# Dependency to get the current user from the cookie session
async def get_current_user(
    request: Request, db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get the current authenticated user.
    Reads the user id from the signed session cookie, then fetches the user from the database.
    """
    user_id = get_session_user_id(request)
    if user_id is None:
        logger.debug(f"Unauthenticated request to {request.method} {request.url.path}")
        raise NotAuthenticatedError()

    user = get_user_by_id(db, user_id)
    if user is None:
        # Session outlived the account (e.g. database was reset)
        logger.warning(f"Session refers to missing user ID {user_id}; clearing it.")
        request.session.clear()
        raise NotAuthenticatedError()

    logger.debug(f"Authenticated user retrieved: {user.username} (ID: {user.id})")
    return user


# --- Role Dependencies ---
def require_roles(*roles: UserRole):
    """
    Builds a dependency that admits only users holding one of the given roles.
    Usage: current_user: User = Depends(require_roles(UserRole.EDUCATOR, UserRole.ADMIN))
    """
    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        return permissions.require_role(current_user, *roles)
    return role_checker

get_current_admin_user = require_roles(UserRole.ADMIN)
get_current_educator_user = require_roles(UserRole.EDUCATOR, UserRole.ADMIN)


# --- Resource Specific Fetching and Authorization Dependencies ---

# Get Course or Raise 404
def get_course_or_404(course_id: int, db: Session = Depends(get_db)) -> Course:
    course = get_course(db, course_id)
    if not course:
        logger.warning(f"Course with ID {course_id} not found.")
        raise NotFoundError("Course not found")
    return course


# Dependency for Course Ownership or Admin
async def get_owned_course(
    course: Course = Depends(get_course_or_404), # Gets course by ID from path
    current_user: User = Depends(get_current_user)
) -> Course:
    permissions.require_ownership(current_user, course.educator_id, resource="course")
    logger.debug(f"User {current_user.username} authorized as owner/admin for course {course.id}")
    return course


# Dependency for read access: owner, admin, or enrolled user
async def get_accessible_course(
    course: Course = Depends(get_course_or_404),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Course:
    enrollment = None
    if not permissions.is_owner_or_admin(current_user, course.educator_id):
        enrollment = get_enrollment(db, current_user.id, course.id)
    permissions.require_course_access(current_user, course, enrollment)
    return course
