from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from learnhub.models.quiz_model import Quiz, QuizAttempt
from learnhub.schemas import quiz_schema as schemas

logger = logging.getLogger(__name__)

# --- Quiz CRUD ---
def create_quiz(db: Session, quiz_in: schemas.QuizCreate) -> Quiz:
    logger.debug(f"Creating quiz '{quiz_in.title}' for course_id {quiz_in.course_id} with {len(quiz_in.questions)} questions")
    db_quiz = Quiz(
        course_id=quiz_in.course_id,
        title=quiz_in.title,
        questions=list(quiz_in.questions),
        answers=list(quiz_in.answers),
    )
    db.add(db_quiz)
    db.commit()
    db.refresh(db_quiz)
    logger.info(f"Quiz '{db_quiz.title}' (ID: {db_quiz.id}) created for course ID {db_quiz.course_id}.")
    return db_quiz

def get_quiz(db: Session, quiz_id: int) -> Optional[Quiz]:
    logger.debug(f"Fetching quiz with ID: {quiz_id}")
    return db.query(Quiz).filter(Quiz.id == quiz_id).first()

def get_course_quizzes(db: Session, course_id: int) -> List[Quiz]:
    logger.debug(f"Fetching quizzes for course_id {course_id}")
    return db.query(Quiz).filter(Quiz.course_id == course_id).order_by(Quiz.id).all()

# --- QuizAttempt CRUD ---
def create_quiz_attempt(db: Session, attempt_in: schemas.QuizAttemptCreate, user_id: int) -> QuizAttempt:
    """
    Records a quiz attempt. The score is trusted as reported by the client.
    """
    logger.debug(f"Recording attempt on quiz_id {attempt_in.quiz_id} by user_id {user_id} (score: {attempt_in.score})")
    db_attempt = QuizAttempt(
        user_id=user_id,
        quiz_id=attempt_in.quiz_id,
        score=attempt_in.score,
        answers=list(attempt_in.answers),
        time_spent=attempt_in.time_spent,
    )
    db.add(db_attempt)
    db.commit()
    db.refresh(db_attempt)
    logger.info(f"Quiz attempt ID {db_attempt.id} recorded for user {user_id} on quiz {db_attempt.quiz_id}.")
    return db_attempt

def get_user_quiz_attempts(db: Session, user_id: int) -> List[QuizAttempt]:
    logger.debug(f"Fetching quiz attempts for user_id {user_id}")
    return db.query(QuizAttempt).filter(QuizAttempt.user_id == user_id).order_by(QuizAttempt.id).all()

def get_quiz_attempts(db: Session, quiz_id: int) -> List[QuizAttempt]:
    logger.debug(f"Fetching attempts for quiz_id {quiz_id}")
    return db.query(QuizAttempt).filter(QuizAttempt.quiz_id == quiz_id).order_by(QuizAttempt.id).all()
