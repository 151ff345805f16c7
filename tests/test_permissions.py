from types import SimpleNamespace

import pytest

from learnhub.core import permissions
from learnhub.core.errors import ForbiddenError, NotAuthenticatedError
from learnhub.models.enums import UserRole


def make_user(user_id, role=UserRole.STUDENT):
    return SimpleNamespace(id=user_id, username=f"user{user_id}", role=role)


STUDENT = make_user(1)
EDUCATOR = make_user(2, UserRole.EDUCATOR)
OTHER_EDUCATOR = make_user(3, UserRole.EDUCATOR)
ADMIN = make_user(4, UserRole.ADMIN)
COURSE = SimpleNamespace(id=10, educator_id=EDUCATOR.id)


@pytest.mark.parametrize("actor, owner_id, expected", [
    (EDUCATOR, EDUCATOR.id, True),
    (OTHER_EDUCATOR, EDUCATOR.id, False),
    (ADMIN, EDUCATOR.id, True),
    (STUDENT, None, False),
    (None, EDUCATOR.id, False),
])
def test_is_owner_or_admin(actor, owner_id, expected):
    assert permissions.is_owner_or_admin(actor, owner_id) is expected


def test_require_authenticated_rejects_anonymous():
    with pytest.raises(NotAuthenticatedError) as exc_info:
        permissions.require_authenticated(None)
    assert exc_info.value.status_code == 401
    assert exc_info.value.reason == "unauthenticated"


def test_require_role_admits_listed_roles_only():
    assert permissions.require_role(EDUCATOR, UserRole.EDUCATOR, UserRole.ADMIN) is EDUCATOR
    with pytest.raises(ForbiddenError) as exc_info:
        permissions.require_role(STUDENT, UserRole.EDUCATOR, UserRole.ADMIN)
    assert exc_info.value.reason == "forbidden_role"


def test_admin_does_not_bypass_role_checks():
    with pytest.raises(ForbiddenError):
        permissions.require_role(ADMIN, UserRole.EDUCATOR)


def test_require_role_checks_authentication_first():
    with pytest.raises(NotAuthenticatedError):
        permissions.require_role(None, UserRole.STUDENT)


def test_require_ownership():
    assert permissions.require_ownership(EDUCATOR, COURSE.educator_id) is EDUCATOR
    assert permissions.require_ownership(ADMIN, COURSE.educator_id) is ADMIN
    with pytest.raises(ForbiddenError) as exc_info:
        permissions.require_ownership(OTHER_EDUCATOR, COURSE.educator_id, resource="course")
    assert exc_info.value.reason == "forbidden_ownership"
    assert exc_info.value.status_code == 403


def test_can_access_course():
    enrollment = SimpleNamespace(user_id=STUDENT.id, course_id=COURSE.id)
    foreign_enrollment = SimpleNamespace(user_id=STUDENT.id, course_id=99)

    assert permissions.can_access_course(EDUCATOR, COURSE)
    assert permissions.can_access_course(ADMIN, COURSE)
    assert permissions.can_access_course(STUDENT, COURSE, enrollment)
    assert not permissions.can_access_course(STUDENT, COURSE)
    assert not permissions.can_access_course(STUDENT, COURSE, foreign_enrollment)
    assert not permissions.can_access_course(OTHER_EDUCATOR, COURSE)


def test_require_course_access_rejects_unenrolled():
    with pytest.raises(ForbiddenError) as exc_info:
        permissions.require_course_access(STUDENT, COURSE)
    assert exc_info.value.reason == "forbidden_ownership"
