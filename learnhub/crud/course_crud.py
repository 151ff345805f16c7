from sqlalchemy.orm import Session
import logging
from typing import List, Optional

from learnhub.models.course_model import Course, Material, LiveClass
from learnhub.models.enums import LiveClassStatus
from learnhub.schemas import course_schema as schemas # Alias for clarity

logger = logging.getLogger(__name__)

# Helper function to update SQLAlchemy model instance from Pydantic schema
def update_db_object(db_obj, obj_in):
    update_data = obj_in.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    return db_obj

# --- Course CRUD ---
def create_course(db: Session, course_in: schemas.CourseCreate, educator_id: int) -> Course:
    logger.debug(f"Creating course '{course_in.title}' for educator_id {educator_id}")
    db_course = Course(**course_in.model_dump(), educator_id=educator_id)
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    logger.info(f"Course '{db_course.title}' (ID: {db_course.id}) created by educator ID {educator_id}.")
    return db_course

def get_course(db: Session, course_id: int) -> Optional[Course]:
    logger.debug(f"Fetching course with ID: {course_id}")
    return db.query(Course).filter(Course.id == course_id).first()

def get_courses(db: Session, skip: int = 0, limit: Optional[int] = None) -> List[Course]:
    logger.debug(f"Fetching courses with skip: {skip}, limit: {limit}")
    query = db.query(Course).order_by(Course.id).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()

def get_educator_courses(db: Session, educator_id: int) -> List[Course]:
    logger.debug(f"Fetching courses for educator_id {educator_id}")
    return db.query(Course).filter(Course.educator_id == educator_id).order_by(Course.id).all()

def update_course(db: Session, course_id: int, course_in: schemas.CourseUpdate) -> Optional[Course]:
    db_course = get_course(db, course_id)
    if not db_course:
        logger.warning(f"Course with ID {course_id} not found for update.")
        return None

    logger.debug(f"Updating course ID: {course_id} with data: {course_in.model_dump(exclude_unset=True)}")
    db_course = update_db_object(db_course, course_in)

    db.commit()
    db.refresh(db_course)
    logger.info(f"Course '{db_course.title}' (ID: {db_course.id}) updated successfully.")
    return db_course

def set_course_thumbnail(db: Session, course_id: int, thumbnail_url: str) -> Optional[Course]:
    db_course = get_course(db, course_id)
    if not db_course:
        logger.warning(f"Course with ID {course_id} not found for thumbnail update.")
        return None
    db_course.thumbnail_url = thumbnail_url
    db.commit()
    db.refresh(db_course)
    logger.info(f"Thumbnail for course ID {course_id} set to {thumbnail_url}.")
    return db_course

# --- Material CRUD ---
def create_material(db: Session, material_in: schemas.MaterialCreate, course_id: int) -> Material:
    logger.debug(f"Creating material '{material_in.title}' for course_id {course_id}")
    db_material = Material(**material_in.model_dump(), course_id=course_id)
    db.add(db_material)
    db.commit()
    db.refresh(db_material)
    logger.info(f"Material '{db_material.title}' (ID: {db_material.id}) created for course ID {course_id}.")
    return db_material

def get_material(db: Session, material_id: int) -> Optional[Material]:
    logger.debug(f"Fetching material with ID: {material_id}")
    return db.query(Material).filter(Material.id == material_id).first()

def get_course_materials(db: Session, course_id: int) -> List[Material]:
    logger.debug(f"Fetching materials for course_id {course_id}")
    return db.query(Material).filter(Material.course_id == course_id).order_by(Material.id).all()

# --- LiveClass CRUD ---
def create_live_class(db: Session, live_class_in: schemas.LiveClassCreate, course_id: int) -> LiveClass:
    logger.debug(f"Scheduling live class '{live_class_in.title}' for course_id {course_id}")
    db_live_class = LiveClass(**live_class_in.model_dump(), course_id=course_id)
    db.add(db_live_class)
    db.commit()
    db.refresh(db_live_class)
    logger.info(f"Live class '{db_live_class.title}' (ID: {db_live_class.id}) scheduled for course ID {course_id} at {db_live_class.scheduled_at}.")
    return db_live_class

def get_live_class(db: Session, live_class_id: int) -> Optional[LiveClass]:
    logger.debug(f"Fetching live class with ID: {live_class_id}")
    return db.query(LiveClass).filter(LiveClass.id == live_class_id).first()

def get_course_live_classes(db: Session, course_id: int) -> List[LiveClass]:
    logger.debug(f"Fetching live classes for course_id {course_id}")
    return db.query(LiveClass).filter(LiveClass.course_id == course_id).order_by(LiveClass.scheduled_at, LiveClass.id).all()

def update_live_class_status(db: Session, live_class_id: int, new_status: LiveClassStatus) -> Optional[LiveClass]:
    db_live_class = get_live_class(db, live_class_id)
    if not db_live_class:
        logger.warning(f"Live class with ID {live_class_id} not found for status update.")
        return None
    db_live_class.status = new_status
    db.commit()
    db.refresh(db_live_class)
    logger.info(f"Live class ID {live_class_id} status updated to {db_live_class.status}.")
    return db_live_class
