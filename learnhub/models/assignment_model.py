from sqlalchemy import (
    Column, Integer, String, Text, ForeignKey, TIMESTAMP,
    Enum as SAEnum
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from learnhub.core.database import Base
from learnhub.models.enums import SubmissionStatus

class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(TIMESTAMP(timezone=True), nullable=True)
    max_score = Column(Integer, nullable=False, default=100)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    submissions = relationship("Submission", back_populates="assignment", order_by="Submission.id")

    def __repr__(self):
        return f"<Assignment(id={self.id}, title='{self.title}', course_id={self.course_id})>"

class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(Integer, ForeignKey("assignments.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    content = Column(Text, nullable=True)
    file_url = Column(String(500), nullable=True)

    grade = Column(Integer, nullable=True)
    feedback = Column(Text, nullable=True)
    status = Column(SAEnum(SubmissionStatus, name="submission_status_enum", values_callable=lambda obj: [e.value for e in obj]),
                    nullable=False, default=SubmissionStatus.SUBMITTED)
    graded_at = Column(TIMESTAMP(timezone=True), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    assignment = relationship("Assignment", back_populates="submissions")

    def __repr__(self):
        return f"<Submission(id={self.id}, assignment_id={self.assignment_id}, user_id={self.user_id}, status='{self.status}')>"
