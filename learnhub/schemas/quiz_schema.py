from pydantic import Field, model_validator
from typing import List, Optional
from datetime import datetime

from learnhub.schemas.base_schema import CamelModel

# --- Quiz Schemas ---
class QuizBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255, description="Title of the quiz")
    questions: List[str] = Field(..., min_length=1, description="Question texts, in order")

class QuizCreate(QuizBase):
    course_id: int
    answers: List[str] = Field(..., description="Expected answer for each question, same order as questions")

    @model_validator(mode="after")
    def check_answers_match_questions(self):
        if len(self.answers) != len(self.questions):
            raise ValueError("answers must have exactly one entry per question")
        return self

# Shown to students: no answers
class QuizDisplay(QuizBase):
    id: int
    course_id: int
    created_at: Optional[datetime] = None

# Shown to the quiz author
class QuizAuthorDisplay(QuizDisplay):
    answers: List[str]

# --- QuizAttempt Schemas ---
class QuizAttemptCreate(CamelModel):
    quiz_id: int
    score: int = Field(..., description="Score computed by the client")
    answers: List[str] = Field(default_factory=list)
    time_spent: int = Field(0, ge=0, description="Seconds spent on the attempt")

class QuizAttemptDisplay(CamelModel):
    id: int
    user_id: int
    quiz_id: int
    score: int
    answers: List[str] = []
    time_spent: int
    created_at: Optional[datetime] = None
