from fastapi import APIRouter, Depends, status, Form, File, UploadFile
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from learnhub.core.database import get_db
from learnhub.core.dependencies import (
    get_current_user,
    get_owned_course,
    get_accessible_course,
    get_settings,
)
from learnhub.core.errors import AuthRejection, ForbiddenError, NotFoundError, ValidationConflictError
from learnhub.core import permissions
from learnhub.models.user_model import User
from learnhub.models.course_model import Course
from learnhub.schemas import assignment_schema as schemas
from learnhub.crud import assignment_crud as crud
from learnhub.crud import course_crud, enrollment_crud
from learnhub.services import notification_service, storage_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Assignments"])


def _get_assignment_and_course(db: Session, assignment_id: int):
    assignment = crud.get_assignment(db, assignment_id)
    if not assignment:
        raise NotFoundError("Assignment not found")
    return assignment, course_crud.get_course(db, assignment.course_id)


@router.post("/courses/{course_id}/assignments", response_model=schemas.AssignmentDisplay, status_code=status.HTTP_201_CREATED)
def create_assignment(
    assignment_in: schemas.AssignmentCreate,
    course: Course = Depends(get_owned_course),
    db: Session = Depends(get_db)
):
    return crud.create_assignment(db, assignment_in, course_id=course.id)

@router.get("/courses/{course_id}/assignments", response_model=List[schemas.AssignmentDisplay])
def read_course_assignments(
    course: Course = Depends(get_accessible_course),
    db: Session = Depends(get_db)
):
    return crud.get_course_assignments(db, course_id=course.id)

@router.post("/assignments/{assignment_id}/submissions", response_model=schemas.SubmissionDisplay, status_code=status.HTTP_201_CREATED)
def submit_assignment(
    assignment_id: int,
    content: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    settings = Depends(get_settings)
):
    """
    Submit work for an assignment as text, a file, or both. (Enrolled users only)
    """
    assignment, course = _get_assignment_and_course(db, assignment_id)
    if not enrollment_crud.get_enrollment(db, current_user.id, course.id):
        logger.warning(f"User {current_user.username} tried to submit to assignment {assignment.id} without enrollment.")
        raise ForbiddenError("Enroll in this course to submit assignments", reason=AuthRejection.FORBIDDEN_OWNERSHIP)

    file_url = None
    if file is not None and file.filename:
        file_url = storage_service.save_upload(file, settings)
    if not content and not file_url:
        raise ValidationConflictError("Submission needs content or a file")

    return crud.create_submission(
        db, schemas.SubmissionCreate(content=content, file_url=file_url),
        assignment_id=assignment.id, user_id=current_user.id,
    )

@router.get("/assignments/{assignment_id}/submissions", response_model=List[schemas.SubmissionDisplay])
def read_assignment_submissions(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    All submissions for an assignment. (Course owner or Admin)
    """
    assignment, course = _get_assignment_and_course(db, assignment_id)
    permissions.require_ownership(current_user, course.educator_id, resource="course")
    return crud.get_assignment_submissions(db, assignment.id)

@router.get("/submissions", response_model=List[schemas.SubmissionDisplay])
def read_my_submissions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return crud.get_user_submissions(db, current_user.id)

@router.patch("/submissions/{submission_id}/grade", response_model=schemas.SubmissionDisplay)
def grade_submission(
    submission_id: int,
    grade_in: schemas.SubmissionGrade,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Grade a submission and notify its author. (Course owner or Admin)
    """
    submission = crud.get_submission(db, submission_id)
    if not submission:
        raise NotFoundError("Submission not found")
    assignment, course = _get_assignment_and_course(db, submission.assignment_id)
    permissions.require_ownership(current_user, course.educator_id, resource="course")

    graded = crud.grade_submission(db, submission.id, grade_in)
    notification_service.notify_submission_graded(db, graded, assignment)
    return graded
