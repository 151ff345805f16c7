import enum

class UserRole(str, enum.Enum):
    STUDENT = "student"
    EDUCATOR = "educator"
    ADMIN = "admin"

class MaterialType(str, enum.Enum):
    PDF = "pdf"
    DOCUMENT = "document"
    VIDEO = "video"
    LINK = "link"
    OTHER = "other"

class LiveClassStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class SubmissionStatus(str, enum.Enum):
    SUBMITTED = "submitted"
    GRADED = "graded"

class NotificationType(str, enum.Enum):
    ENROLLMENT = "enrollment"
    GRADE = "grade"
    REPLY = "reply"
    PAYOUT = "payout"
    EARNING = "earning"
    LIVE_CLASS = "live_class"
    SYSTEM = "system"

class EarningSource(str, enum.Enum):
    REFERRAL_SIGNUP = "referral_signup"         # Referrer's bonus when someone signs up with their code
    REFERRAL_COMMISSION = "referral_commission" # Referrer's share of a course purchase
    COURSE_SALE = "course_sale"                 # Educator's share of a course purchase

class PayoutStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"       # Terminal; balance decremented
    FAILED = "failed"   # Terminal; balance untouched

# Enum columns use `values_callable=lambda obj: [e.value for e in obj]` so the stored
# strings are the lowercase values above, not the member names.
