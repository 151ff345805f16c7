from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
import logging

from learnhub.core.database import get_db
from learnhub.core.dependencies import (
    get_current_user,
    get_current_educator_user,
    get_course_or_404,
    get_settings,
)
from learnhub.core.errors import NotFoundError
from learnhub.core import permissions
from learnhub.models.user_model import User
from learnhub.models.course_model import Course
from learnhub.schemas import quiz_schema, enrollment_schema
from learnhub.crud import quiz_crud, enrollment_crud, course_crud
from learnhub.services import notification_service, rewards_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Learning & Progress"])


# --- Quizzes ---
@router.post("/quizzes", response_model=quiz_schema.QuizAuthorDisplay, status_code=status.HTTP_201_CREATED)
def create_quiz(
    quiz_in: quiz_schema.QuizCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_educator_user)
):
    """
    Create a quiz for a course the current educator owns.
    """
    course = course_crud.get_course(db, quiz_in.course_id)
    if not course:
        raise NotFoundError("Course not found")
    permissions.require_ownership(current_user, course.educator_id, resource="course")
    return quiz_crud.create_quiz(db, quiz_in)

@router.get("/courses/{course_id}/quizzes", response_model=List[quiz_schema.QuizDisplay])
def read_course_quizzes(
    course: Course = Depends(get_course_or_404),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List a course's quizzes. Expected answers are never included.
    """
    return quiz_crud.get_course_quizzes(db, course.id)

@router.get("/quizzes/{quiz_id}", response_model=quiz_schema.QuizDisplay)
def read_quiz(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    quiz = quiz_crud.get_quiz(db, quiz_id)
    if not quiz:
        raise NotFoundError("Quiz not found")
    return quiz

@router.get("/quizzes/{quiz_id}/attempts", response_model=List[quiz_schema.QuizAttemptDisplay])
def read_quiz_attempts(
    quiz_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    All attempts on a quiz. (Owner of the quiz's course, or Admin)
    """
    quiz = quiz_crud.get_quiz(db, quiz_id)
    if not quiz:
        raise NotFoundError("Quiz not found")
    permissions.require_ownership(current_user, quiz.course.educator_id, resource="quiz")
    return quiz_crud.get_quiz_attempts(db, quiz.id)

@router.post("/quiz-attempts", response_model=quiz_schema.QuizAttemptDisplay, status_code=status.HTTP_201_CREATED)
def submit_quiz_attempt(
    attempt_in: quiz_schema.QuizAttemptCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Record an attempt for the current user. The score is taken as reported by the client.
    """
    if not quiz_crud.get_quiz(db, attempt_in.quiz_id):
        raise NotFoundError("Quiz not found")
    return quiz_crud.create_quiz_attempt(db, attempt_in, user_id=current_user.id)

@router.get("/quiz-attempts", response_model=List[quiz_schema.QuizAttemptDisplay])
def read_my_quiz_attempts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return quiz_crud.get_user_quiz_attempts(db, current_user.id)


# --- Enrollments ---
@router.post("/enrollments", response_model=enrollment_schema.EnrollmentDisplay, status_code=status.HTTP_201_CREATED)
def enroll_in_course(
    enrollment_in: enrollment_schema.EnrollmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    settings = Depends(get_settings)
):
    """
    Enroll the current user in a course.

    A paid course's price is split into earnings for its educator and,
    if the student was referred, for the referrer.
    """
    course = course_crud.get_course(db, enrollment_in.course_id)
    if not course:
        raise NotFoundError("Course not found")

    enrollment = enrollment_crud.create_enrollment(db, user_id=current_user.id, course_id=course.id)
    rewards_service.apply_course_purchase(db, current_user, course, settings)
    if course.educator_id != current_user.id:
        notification_service.notify_new_enrollment(db, course, current_user)
    return enrollment

@router.get("/enrollments", response_model=List[enrollment_schema.EnrollmentDisplay])
def read_my_enrollments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return enrollment_crud.get_user_enrollments(db, current_user.id)

@router.get("/enrollments/{course_id}", response_model=enrollment_schema.EnrollmentDisplay)
def read_my_enrollment_for_course(
    course_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    The current user's enrollment in the given course, or 404 when not enrolled.
    """
    enrollment = enrollment_crud.get_enrollment(db, current_user.id, course_id)
    if not enrollment:
        raise NotFoundError("Enrollment not found")
    return enrollment

@router.patch("/enrollments/{enrollment_id}/progress", response_model=enrollment_schema.EnrollmentDisplay)
def update_progress(
    enrollment_id: int,
    progress_in: enrollment_schema.ProgressUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Set an enrollment's progress. Reaching exactly 100 marks it completed.
    (Enrolled user or Admin)
    """
    enrollment = enrollment_crud.get_enrollment_by_id(db, enrollment_id)
    if not enrollment:
        raise NotFoundError("Enrollment not found")
    permissions.require_ownership(current_user, enrollment.user_id, resource="enrollment")
    return enrollment_crud.update_enrollment_progress(db, enrollment.id, progress_in.progress)
