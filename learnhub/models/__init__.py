# This file makes the 'models' directory a Python package.

from learnhub.core.database import Base # Base must be imported before models that use it

from .enums import ( # Import all enums
    UserRole, MaterialType, LiveClassStatus, SubmissionStatus,
    NotificationType, EarningSource, PayoutStatus
)

from .user_model import User
from .course_model import Course, Material, LiveClass
from .quiz_model import Quiz, QuizAttempt
from .enrollment_model import Enrollment
from .assignment_model import Assignment, Submission
from .discussion_model import Discussion, Reply
from .notification_model import Notification
from .analytics_model import CourseAnalytics
from .referral_model import Earning
from .payout_model import Payout


__all__ = [
    "Base",
    # Models
    "User",
    "Course",
    "Material",
    "LiveClass",
    "Quiz",
    "QuizAttempt",
    "Enrollment",
    "Assignment",
    "Submission",
    "Discussion",
    "Reply",
    "Notification",
    "CourseAnalytics",
    "Earning",
    "Payout",
    # Enums
    "UserRole",
    "MaterialType",
    "LiveClassStatus",
    "SubmissionStatus",
    "NotificationType",
    "EarningSource",
    "PayoutStatus",
]
