from sqlalchemy.orm import Session
from datetime import datetime, timezone
import logging
from typing import List, Optional

from learnhub.core.errors import NotFoundError, ValidationConflictError
from learnhub.models.assignment_model import Assignment, Submission
from learnhub.models.enums import SubmissionStatus
from learnhub.schemas import assignment_schema as schemas

logger = logging.getLogger(__name__)

# --- Assignment CRUD ---
def create_assignment(db: Session, assignment_in: schemas.AssignmentCreate, course_id: int) -> Assignment:
    logger.debug(f"Creating assignment '{assignment_in.title}' for course_id {course_id}")
    db_assignment = Assignment(**assignment_in.model_dump(), course_id=course_id)
    db.add(db_assignment)
    db.commit()
    db.refresh(db_assignment)
    logger.info(f"Assignment '{db_assignment.title}' (ID: {db_assignment.id}) created for course ID {course_id}.")
    return db_assignment

def get_assignment(db: Session, assignment_id: int) -> Optional[Assignment]:
    logger.debug(f"Fetching assignment with ID: {assignment_id}")
    return db.query(Assignment).filter(Assignment.id == assignment_id).first()

def get_course_assignments(db: Session, course_id: int) -> List[Assignment]:
    logger.debug(f"Fetching assignments for course_id {course_id}")
    return db.query(Assignment).filter(Assignment.course_id == course_id).order_by(Assignment.id).all()

# --- Submission CRUD ---
def create_submission(db: Session, submission_in: schemas.SubmissionCreate, assignment_id: int, user_id: int) -> Submission:
    logger.debug(f"Creating submission for assignment_id {assignment_id} by user_id {user_id}")
    db_submission = Submission(
        **submission_in.model_dump(),
        assignment_id=assignment_id,
        user_id=user_id,
        status=SubmissionStatus.SUBMITTED,
    )
    db.add(db_submission)
    db.commit()
    db.refresh(db_submission)
    logger.info(f"Submission ID {db_submission.id} created for assignment {assignment_id} by user {user_id}.")
    return db_submission

def get_submission(db: Session, submission_id: int) -> Optional[Submission]:
    logger.debug(f"Fetching submission with ID: {submission_id}")
    return db.query(Submission).filter(Submission.id == submission_id).first()

def get_assignment_submissions(db: Session, assignment_id: int) -> List[Submission]:
    logger.debug(f"Fetching submissions for assignment_id {assignment_id}")
    return db.query(Submission).filter(Submission.assignment_id == assignment_id).order_by(Submission.id).all()

def get_user_submissions(db: Session, user_id: int) -> List[Submission]:
    logger.debug(f"Fetching submissions for user_id {user_id}")
    return db.query(Submission).filter(Submission.user_id == user_id).order_by(Submission.id).all()

def grade_submission(db: Session, submission_id: int, grade_in: schemas.SubmissionGrade) -> Submission:
    """
    Records a grade and feedback. Regrading overwrites the previous grade.

    Raises:
        NotFoundError: the submission does not exist.
        ValidationConflictError: the grade exceeds the assignment's max score.
    """
    db_submission = get_submission(db, submission_id)
    if not db_submission:
        logger.warning(f"Submission with ID {submission_id} not found for grading.")
        raise NotFoundError("Submission not found")

    max_score = db_submission.assignment.max_score
    if grade_in.grade > max_score:
        logger.warning(f"Grade {grade_in.grade} exceeds max score {max_score} for submission {submission_id}.")
        raise ValidationConflictError(f"Grade cannot exceed the assignment's max score of {max_score}")

    db_submission.grade = grade_in.grade
    db_submission.feedback = grade_in.feedback
    db_submission.status = SubmissionStatus.GRADED
    db_submission.graded_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(db_submission)
    logger.info(f"Submission ID {submission_id} graded {db_submission.grade}/{max_score}.")
    return db_submission
