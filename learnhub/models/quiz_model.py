from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from learnhub.core.database import Base

class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)

    # Parallel lists: answers[i] is the expected answer to questions[i]
    questions = Column(JSON, nullable=False, default=list)
    answers = Column(JSON, nullable=False, default=list)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    course = relationship("Course", back_populates="quizzes")
    attempts = relationship("QuizAttempt", back_populates="quiz", order_by="QuizAttempt.id")

    def __repr__(self):
        return f"<Quiz(id={self.id}, title='{self.title}', course_id={self.course_id})>"

class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)

    score = Column(Integer, nullable=False) # Reported by the client, stored as-is
    answers = Column(JSON, nullable=False, default=list)
    time_spent = Column(Integer, nullable=False, default=0) # Seconds

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    quiz = relationship("Quiz", back_populates="attempts")

    def __repr__(self):
        return f"<QuizAttempt(id={self.id}, user_id={self.user_id}, quiz_id={self.quiz_id}, score={self.score})>"
