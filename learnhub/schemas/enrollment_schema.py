from pydantic import Field
from typing import Optional
from datetime import datetime

from learnhub.schemas.base_schema import CamelModel

class EnrollmentCreate(CamelModel):
    course_id: int

# No bounds: progress is stored as reported
class ProgressUpdate(CamelModel):
    progress: int = Field(..., description="Progress percentage; 100 marks the course completed")

class EnrollmentDisplay(CamelModel):
    id: int
    user_id: int
    course_id: int
    progress: int
    completed: bool
    created_at: Optional[datetime] = None
