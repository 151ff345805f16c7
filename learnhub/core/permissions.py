"""
Authorization checks, independent of FastAPI so they can be tested in isolation.

Each check either returns normally or raises a typed rejection:
    require_authenticated -> NotAuthenticatedError (unauthenticated)
    require_role          -> ForbiddenError (forbidden_role)
    require_ownership     -> ForbiddenError (forbidden_ownership)
Admins bypass ownership checks, never role checks.
"""
import logging
from typing import Optional

from learnhub.core.errors import AuthRejection, ForbiddenError, NotAuthenticatedError
from learnhub.models.enums import UserRole

logger = logging.getLogger(__name__)


def is_admin(actor) -> bool:
    return actor is not None and actor.role == UserRole.ADMIN

def is_owner_or_admin(actor, owner_id: Optional[int]) -> bool:
    """Ownership predicate over an (actor, owning user id) pair."""
    if actor is None:
        return False
    return is_admin(actor) or (owner_id is not None and owner_id == actor.id)

def can_access_course(actor, course, enrollment=None) -> bool:
    """Read access to a course's content: owning educator, admin, or an enrolled user."""
    if is_owner_or_admin(actor, course.educator_id):
        return True
    return enrollment is not None and enrollment.user_id == actor.id and enrollment.course_id == course.id

def require_authenticated(actor):
    if actor is None:
        raise NotAuthenticatedError()
    return actor

def require_role(actor, *roles: UserRole):
    require_authenticated(actor)
    if actor.role not in roles:
        allowed = ", ".join(role.value for role in roles)
        logger.warning(f"Role check failed for user {actor.username} (role: {actor.role.value}, allowed: {allowed})")
        raise ForbiddenError(f"Requires one of the roles: {allowed}", reason=AuthRejection.FORBIDDEN_ROLE)
    return actor

def require_ownership(actor, owner_id: Optional[int], resource: str = "resource"):
    require_authenticated(actor)
    if not is_owner_or_admin(actor, owner_id):
        logger.warning(f"Ownership check failed: user {actor.username} (ID: {actor.id}) does not own {resource} (owner ID: {owner_id})")
        raise ForbiddenError(f"Not authorized to access this {resource}", reason=AuthRejection.FORBIDDEN_OWNERSHIP)
    return actor

def require_course_access(actor, course, enrollment=None):
    require_authenticated(actor)
    if not can_access_course(actor, course, enrollment):
        logger.warning(f"Course access denied: user {actor.username} (ID: {actor.id}) is not enrolled in or owner of course {course.id}")
        raise ForbiddenError("Enroll in this course to access its content", reason=AuthRejection.FORBIDDEN_OWNERSHIP)
    return actor
