from pydantic import Field
from typing import Optional
from datetime import datetime

from learnhub.models.enums import SubmissionStatus
from learnhub.schemas.base_schema import CamelModel

# --- Assignment Schemas ---
class AssignmentCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    max_score: int = Field(100, ge=1)

class AssignmentDisplay(AssignmentCreate):
    id: int
    course_id: int
    created_at: Optional[datetime] = None

# --- Submission Schemas ---
class SubmissionCreate(CamelModel):
    content: Optional[str] = None
    file_url: Optional[str] = None

class SubmissionGrade(CamelModel):
    grade: int = Field(..., ge=0)
    feedback: Optional[str] = Field(None, max_length=5000)

class SubmissionDisplay(SubmissionCreate):
    id: int
    assignment_id: int
    user_id: int
    grade: Optional[int] = None
    feedback: Optional[str] = None
    status: SubmissionStatus
    graded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
