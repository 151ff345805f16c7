from pydantic import Field
from typing import Optional
from datetime import datetime

from learnhub.models.enums import MaterialType, LiveClassStatus
from learnhub.schemas.base_schema import CamelModel

# --- Course Schemas ---
class CourseBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255, description="Title of the course")
    description: str = Field(..., description="Detailed description of the course")
    video_url: str = Field(..., max_length=500, description="Main course video")
    price: float = Field(0.0, ge=0, description="Price charged on enrollment; 0 for free courses")

class CourseCreate(CourseBase):
    thumbnail_url: Optional[str] = None

class CourseUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    video_url: Optional[str] = Field(None, max_length=500)
    price: Optional[float] = Field(None, ge=0)

class CourseDisplay(CourseBase):
    id: int
    educator_id: int
    thumbnail_url: Optional[str] = None
    created_at: Optional[datetime] = None

# --- Material Schemas ---
class MaterialCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    file_url: str = Field(..., max_length=500)
    material_type: MaterialType = MaterialType.OTHER

class MaterialDisplay(MaterialCreate):
    id: int
    course_id: int
    created_at: Optional[datetime] = None

# --- LiveClass Schemas ---
class LiveClassCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    scheduled_at: datetime
    duration_minutes: int = Field(60, gt=0, le=600)
    meeting_url: Optional[str] = Field(None, max_length=500)

class LiveClassStatusUpdate(CamelModel):
    status: LiveClassStatus

class LiveClassDisplay(LiveClassCreate):
    id: int
    course_id: int
    status: LiveClassStatus
    created_at: Optional[datetime] = None
