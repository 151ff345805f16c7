from fastapi import APIRouter, Depends, status, Form, File, UploadFile
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from learnhub.core.database import get_db
from learnhub.core.dependencies import (
    get_current_user,
    get_current_educator_user,
    get_course_or_404, # Any authenticated user may read course details
    get_owned_course,
    get_accessible_course,
    get_settings,
)
from learnhub.core.errors import NotFoundError, ValidationConflictError
from learnhub.core import permissions
from learnhub.models.user_model import User
from learnhub.models.course_model import Course # For type hints
from learnhub.models.enums import MaterialType
from learnhub.schemas import course_schema as schemas # Alias for clarity
from learnhub.schemas.enrollment_schema import EnrollmentDisplay
from learnhub.schemas.admin_schema import CourseAnalyticsDisplay
from learnhub.crud import course_crud as crud # Alias for clarity
from learnhub.crud import enrollment_crud, analytics_crud
from learnhub.services import notification_service, storage_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Courses & Learning Content"])


def _has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)

# --- Course Endpoints ---
@router.post("/courses", response_model=schemas.CourseDisplay, status_code=status.HTTP_201_CREATED)
def create_new_course(
    title: str = Form(..., min_length=1, max_length=255),
    description: str = Form(...),
    video_url: str = Form(..., alias="videoUrl", max_length=500),
    price: float = Form(0.0, ge=0),
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_educator_user), # Educators (and admins) create courses
    settings = Depends(get_settings)
):
    """
    Create a new course from a multipart form, with an optional thumbnail image.
    The creator becomes the course's educator. (Educator or Admin)
    """
    logger.info(f"User {current_user.username} creating course: {title}")
    thumbnail_url = None
    if _has_file(thumbnail):
        thumbnail_url = storage_service.save_upload(thumbnail, settings)

    course_in = schemas.CourseCreate(
        title=title, description=description, video_url=video_url, price=price, thumbnail_url=thumbnail_url
    )
    return crud.create_course(db=db, course_in=course_in, educator_id=current_user.id)

@router.get("/courses", response_model=List[schemas.CourseDisplay])
def read_courses_list(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get the catalog of all courses. Any authenticated user.
    """
    return crud.get_courses(db)

@router.get("/educator/courses", response_model=List[schemas.CourseDisplay])
def read_educator_courses(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_educator_user)
):
    """
    Get the courses owned by the current educator.
    """
    return crud.get_educator_courses(db, educator_id=current_user.id)

@router.get("/courses/{course_id}", response_model=schemas.CourseDisplay)
def read_single_course(
    course: Course = Depends(get_course_or_404), # Path variable 'course_id' implicitly used by Depends
    current_user: User = Depends(get_current_user)
):
    """
    Get details of a specific course. Any authenticated user.
    """
    return course

@router.patch("/courses/{course_id}", response_model=schemas.CourseDisplay)
def update_existing_course(
    course_in: schemas.CourseUpdate,
    course: Course = Depends(get_owned_course), # Ensures user is owner or admin
    db: Session = Depends(get_db)
):
    """
    Update an existing course. (Course owner or Admin)
    """
    logger.info(f"Updating course ID {course.id} with fields {sorted(course_in.model_dump(exclude_unset=True))}")
    return crud.update_course(db=db, course_id=course.id, course_in=course_in)

@router.get("/courses/{course_id}/students", response_model=List[EnrollmentDisplay])
def read_course_students(
    course: Course = Depends(get_owned_course),
    db: Session = Depends(get_db)
):
    """
    List the enrollments of a course, with each student's progress. (Course owner or Admin)
    """
    return enrollment_crud.get_course_enrollments(db, course_id=course.id)

@router.get("/courses/{course_id}/analytics", response_model=CourseAnalyticsDisplay)
def read_course_analytics(
    course: Course = Depends(get_owned_course),
    db: Session = Depends(get_db)
):
    """
    Recompute and return a course's analytics snapshot. (Course owner or Admin)
    """
    return analytics_crud.refresh_course_analytics(db, course_id=course.id)

# --- Material Endpoints ---
@router.post("/courses/{course_id}/materials", response_model=schemas.MaterialDisplay, status_code=status.HTTP_201_CREATED)
def create_course_material(
    title: str = Form(..., min_length=1, max_length=255),
    description: Optional[str] = Form(None),
    material_type: MaterialType = Form(MaterialType.OTHER, alias="materialType"),
    file_url: Optional[str] = Form(None, alias="fileUrl", max_length=500),
    file: Optional[UploadFile] = File(None),
    course: Course = Depends(get_owned_course),
    db: Session = Depends(get_db),
    settings = Depends(get_settings)
):
    """
    Attach a material to a course, either as an uploaded file or as a link. (Course owner or Admin)
    """
    if _has_file(file):
        file_url = storage_service.save_upload(file, settings)
    if not file_url:
        raise ValidationConflictError("Provide either a file or a fileUrl")

    material_in = schemas.MaterialCreate(
        title=title, description=description, material_type=material_type, file_url=file_url
    )
    return crud.create_material(db=db, material_in=material_in, course_id=course.id)

@router.get("/courses/{course_id}/materials", response_model=List[schemas.MaterialDisplay])
def read_course_materials(
    course: Course = Depends(get_accessible_course), # Owner, admin or enrolled user
    db: Session = Depends(get_db)
):
    return crud.get_course_materials(db, course_id=course.id)

# --- Live Class Endpoints ---
@router.post("/courses/{course_id}/live-classes", response_model=schemas.LiveClassDisplay, status_code=status.HTTP_201_CREATED)
def schedule_live_class(
    live_class_in: schemas.LiveClassCreate,
    course: Course = Depends(get_owned_course),
    db: Session = Depends(get_db)
):
    """
    Schedule a live class and notify the course's enrolled students. (Course owner or Admin)
    """
    live_class = crud.create_live_class(db=db, live_class_in=live_class_in, course_id=course.id)
    notification_service.notify_live_class_scheduled(db, course, live_class)
    return live_class

@router.get("/courses/{course_id}/live-classes", response_model=List[schemas.LiveClassDisplay])
def read_course_live_classes(
    course: Course = Depends(get_accessible_course),
    db: Session = Depends(get_db)
):
    return crud.get_course_live_classes(db, course_id=course.id)

@router.patch("/live-classes/{live_class_id}/status", response_model=schemas.LiveClassDisplay)
def update_live_class_status(
    live_class_id: int,
    status_in: schemas.LiveClassStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Move a live class to scheduled, live, completed or cancelled. (Course owner or Admin)
    """
    live_class = crud.get_live_class(db, live_class_id)
    if not live_class:
        raise NotFoundError("Live class not found")
    permissions.require_ownership(current_user, live_class.course.educator_id, resource="live class")
    return crud.update_live_class_status(db, live_class_id=live_class.id, new_status=status_in.status)
