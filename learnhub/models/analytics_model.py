from sqlalchemy import Column, Integer, Float, ForeignKey, TIMESTAMP
from sqlalchemy.sql import func

from learnhub.core.database import Base

class CourseAnalytics(Base):
    """Snapshot of a course's enrollment metrics, recomputed on read."""
    __tablename__ = "course_analytics"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, unique=True, index=True)

    total_students = Column(Integer, nullable=False, default=0)
    active_students = Column(Integer, nullable=False, default=0)    # Started but not completed
    completed_students = Column(Integer, nullable=False, default=0)
    average_progress = Column(Float, nullable=False, default=0.0)
    completion_rate = Column(Float, nullable=False, default=0.0)    # Percentage of enrollments completed
    revenue = Column(Float, nullable=False, default=0.0)            # Educator's credited course sales

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<CourseAnalytics(course_id={self.course_id}, total_students={self.total_students}, completion_rate={self.completion_rate})>"
