from pydantic import Field
from typing import Optional
from datetime import datetime

from learnhub.schemas.base_schema import CamelModel

class DiscussionCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)

class DiscussionDisplay(DiscussionCreate):
    id: int
    course_id: int
    user_id: int
    created_at: Optional[datetime] = None

class ReplyCreate(CamelModel):
    content: str = Field(..., min_length=1)

class ReplyDisplay(ReplyCreate):
    id: int
    discussion_id: int
    user_id: int
    created_at: Optional[datetime] = None
