# This file makes the 'schemas' directory a Python package.

from .base_schema import CamelModel, MessageResponse

from .user_schema import (
    UserRegister,
    UserLogin,
    UserCreateInternal,
    UserDisplay,
)

from .course_schema import (
    CourseBase, CourseCreate, CourseUpdate, CourseDisplay,
    MaterialCreate, MaterialDisplay,
    LiveClassCreate, LiveClassStatusUpdate, LiveClassDisplay,
)

from .quiz_schema import (
    QuizCreate, QuizDisplay, QuizAuthorDisplay,
    QuizAttemptCreate, QuizAttemptDisplay,
)

from .enrollment_schema import EnrollmentCreate, ProgressUpdate, EnrollmentDisplay

from .assignment_schema import (
    AssignmentCreate, AssignmentDisplay,
    SubmissionCreate, SubmissionGrade, SubmissionDisplay,
)

from .discussion_schema import DiscussionCreate, DiscussionDisplay, ReplyCreate, ReplyDisplay

from .notification_schema import NotificationCreate, NotificationDisplay

from .admin_schema import PlatformStatsOverview, CourseAnalyticsDisplay

from .referral_schema import ReferralInfo, EarningCreate, EarningDisplay

from .payout_schema import PayoutRequest, PayoutProcess, PayoutDisplay


__all__ = [
    "CamelModel", "MessageResponse",
    # User
    "UserRegister", "UserLogin", "UserCreateInternal", "UserDisplay",
    # Course, materials, live classes
    "CourseBase", "CourseCreate", "CourseUpdate", "CourseDisplay",
    "MaterialCreate", "MaterialDisplay",
    "LiveClassCreate", "LiveClassStatusUpdate", "LiveClassDisplay",
    # Quiz
    "QuizCreate", "QuizDisplay", "QuizAuthorDisplay",
    "QuizAttemptCreate", "QuizAttemptDisplay",
    # Enrollment
    "EnrollmentCreate", "ProgressUpdate", "EnrollmentDisplay",
    # Assignment
    "AssignmentCreate", "AssignmentDisplay",
    "SubmissionCreate", "SubmissionGrade", "SubmissionDisplay",
    # Discussion
    "DiscussionCreate", "DiscussionDisplay", "ReplyCreate", "ReplyDisplay",
    # Notification
    "NotificationCreate", "NotificationDisplay",
    # Admin / analytics
    "PlatformStatsOverview", "CourseAnalyticsDisplay",
    # Referral / earnings / payouts
    "ReferralInfo", "EarningCreate", "EarningDisplay",
    "PayoutRequest", "PayoutProcess", "PayoutDisplay",
]
