from pydantic import Field
from typing import Optional
from datetime import datetime

from learnhub.schemas.base_schema import CamelModel

# --- Platform Overview Stats ---
class PlatformStatsOverview(CamelModel):
    total_users: int = Field(..., description="Total number of registered users")
    total_students: int
    total_educators: int
    total_courses: int = Field(..., description="Total number of courses on the platform")
    total_enrollments: int
    completed_enrollments: int
    pending_payouts: int = Field(..., description="Number of payout requests awaiting admin action")
    pending_payout_amount: float = Field(..., description="Sum of pending payout requests")
    total_paid_out: float = Field(..., description="Sum of payouts marked paid")
    total_earnings_credited: float = Field(..., description="Sum of all earnings ledger credits")

# --- Course Analytics ---
class CourseAnalyticsDisplay(CamelModel):
    course_id: int
    total_students: int = Field(..., description="Number of enrollments in the course")
    active_students: int = Field(..., description="Enrolled students who started but have not completed")
    completed_students: int
    average_progress: float
    completion_rate: float = Field(..., description="Percentage of enrollments that are completed")
    revenue: float = Field(..., description="Course sale earnings credited to the educator")
    updated_at: Optional[datetime] = None
