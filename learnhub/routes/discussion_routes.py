from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from learnhub.core.database import get_db
from learnhub.core.dependencies import get_current_user, get_accessible_course
from learnhub.core.errors import NotFoundError
from learnhub.core import permissions
from learnhub.models.user_model import User
from learnhub.models.course_model import Course
from learnhub.schemas import discussion_schema as schemas
from learnhub.crud import discussion_crud as crud
from learnhub.crud import course_crud, enrollment_crud
from learnhub.services import notification_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Discussions"])


def _get_accessible_discussion(db: Session, discussion_id: int, current_user: User):
    """Fetches a discussion and checks the caller can read its parent course."""
    discussion = crud.get_discussion(db, discussion_id)
    if not discussion:
        raise NotFoundError("Discussion not found")
    course = course_crud.get_course(db, discussion.course_id)
    enrollment = enrollment_crud.get_enrollment(db, current_user.id, course.id)
    permissions.require_course_access(current_user, course, enrollment)
    return discussion


@router.post("/courses/{course_id}/discussions", response_model=schemas.DiscussionDisplay, status_code=status.HTTP_201_CREATED)
def start_discussion(
    discussion_in: schemas.DiscussionCreate,
    course: Course = Depends(get_accessible_course),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return crud.create_discussion(db, discussion_in, course_id=course.id, user_id=current_user.id)

@router.get("/courses/{course_id}/discussions", response_model=List[schemas.DiscussionDisplay])
def read_course_discussions(
    course: Course = Depends(get_accessible_course),
    db: Session = Depends(get_db)
):
    """
    Discussions of a course, newest first.
    """
    return crud.get_course_discussions(db, course_id=course.id)

@router.post("/discussions/{discussion_id}/replies", response_model=schemas.ReplyDisplay, status_code=status.HTTP_201_CREATED)
def reply_to_discussion(
    discussion_id: int,
    reply_in: schemas.ReplyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Reply to a discussion. The discussion's author is notified unless they replied themselves.
    """
    discussion = _get_accessible_discussion(db, discussion_id, current_user)
    reply = crud.create_reply(db, reply_in, discussion_id=discussion.id, user_id=current_user.id)
    notification_service.notify_discussion_reply(db, discussion, reply, current_user)
    return reply

@router.get("/discussions/{discussion_id}/replies", response_model=List[schemas.ReplyDisplay])
def read_discussion_replies(
    discussion_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    discussion = _get_accessible_discussion(db, discussion_id, current_user)
    return crud.get_discussion_replies(db, discussion.id)
