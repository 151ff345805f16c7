from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging
from typing import List, Optional

from learnhub.core.errors import NotFoundError, ValidationConflictError
from learnhub.models.enrollment_model import Enrollment

logger = logging.getLogger(__name__)

COMPLETED_PROGRESS = 100

def get_enrollment(db: Session, user_id: int, course_id: int) -> Optional[Enrollment]:
    """Fetches the enrollment for a (user, course) pair."""
    logger.debug(f"Fetching enrollment for user_id {user_id}, course_id {course_id}")
    return db.query(Enrollment).filter(
        Enrollment.user_id == user_id,
        Enrollment.course_id == course_id
    ).first()

def get_enrollment_by_id(db: Session, enrollment_id: int) -> Optional[Enrollment]:
    logger.debug(f"Fetching enrollment with ID: {enrollment_id}")
    return db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()

def create_enrollment(db: Session, user_id: int, course_id: int) -> Enrollment:
    """
    Enrolls a user in a course with zero progress.
    Raises ValidationConflictError if the (user, course) pair is already enrolled.
    """
    if get_enrollment(db, user_id, course_id):
        logger.warning(f"User {user_id} is already enrolled in course {course_id}.")
        raise ValidationConflictError("Already enrolled in this course")

    db_enrollment = Enrollment(user_id=user_id, course_id=course_id, progress=0, completed=False)
    db.add(db_enrollment)
    try:
        db.commit()
    except IntegrityError:
        # The unique constraint caught a concurrent duplicate
        db.rollback()
        logger.warning(f"Duplicate enrollment for user {user_id} in course {course_id} rejected by the database.")
        raise ValidationConflictError("Already enrolled in this course")
    db.refresh(db_enrollment)
    logger.info(f"Enrollment ID {db_enrollment.id} created: user {user_id} in course {course_id}.")
    return db_enrollment

def get_user_enrollments(db: Session, user_id: int) -> List[Enrollment]:
    logger.debug(f"Fetching enrollments for user_id {user_id}")
    return db.query(Enrollment).filter(Enrollment.user_id == user_id).order_by(Enrollment.id).all()

def get_course_enrollments(db: Session, course_id: int) -> List[Enrollment]:
    logger.debug(f"Fetching enrollments for course_id {course_id}")
    return db.query(Enrollment).filter(Enrollment.course_id == course_id).order_by(Enrollment.id).all()

def update_enrollment_progress(db: Session, enrollment_id: int, progress: int) -> Enrollment:
    """
    Sets the progress of an enrollment and derives completion from it.

    completed is True exactly when progress == 100. Progress is stored as
    given: no clamping, and it may move backwards.

    Raises:
        NotFoundError: the enrollment does not exist.
    """
    db_enrollment = get_enrollment_by_id(db, enrollment_id)
    if not db_enrollment:
        logger.warning(f"Enrollment with ID {enrollment_id} not found for progress update.")
        raise NotFoundError("Enrollment not found")

    db_enrollment.progress = progress
    db_enrollment.completed = progress == COMPLETED_PROGRESS

    db.commit()
    db.refresh(db_enrollment)
    logger.info(f"Enrollment ID {enrollment_id} progress set to {progress} (completed: {db_enrollment.completed}).")
    return db_enrollment
