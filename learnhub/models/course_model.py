from sqlalchemy import (
    Column, Integer, String, Text, Float, ForeignKey, TIMESTAMP,
    Enum as SAEnum
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from learnhub.core.database import Base
from learnhub.models.enums import MaterialType, LiveClassStatus

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    video_url = Column(String(500), nullable=False)
    thumbnail_url = Column(String(500), nullable=True)
    price = Column(Float, nullable=False, default=0.0)

    educator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    educator = relationship("User", back_populates="courses_owned")
    materials = relationship("Material", back_populates="course", order_by="Material.id")
    live_classes = relationship("LiveClass", back_populates="course", order_by="LiveClass.scheduled_at")
    quizzes = relationship("Quiz", back_populates="course", order_by="Quiz.id")
    enrollments = relationship("Enrollment", back_populates="course")

    def __repr__(self):
        return f"<Course(id={self.id}, title='{self.title}', educator_id={self.educator_id})>"

class Material(Base):
    __tablename__ = "materials"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    file_url = Column(String(500), nullable=False)
    material_type = Column(SAEnum(MaterialType, name="material_type_enum", values_callable=lambda obj: [e.value for e in obj]),
                           nullable=False, default=MaterialType.OTHER)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    course = relationship("Course", back_populates="materials")

    def __repr__(self):
        return f"<Material(id={self.id}, course_id={self.course_id}, type='{self.material_type}')>"

class LiveClass(Base):
    __tablename__ = "live_classes"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    scheduled_at = Column(TIMESTAMP(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60)
    meeting_url = Column(String(500), nullable=True)
    status = Column(SAEnum(LiveClassStatus, name="live_class_status_enum", values_callable=lambda obj: [e.value for e in obj]),
                    nullable=False, default=LiveClassStatus.SCHEDULED)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    course = relationship("Course", back_populates="live_classes")

    def __repr__(self):
        return f"<LiveClass(id={self.id}, course_id={self.course_id}, status='{self.status}')>"
