from pydantic import Field
from typing import Optional
from datetime import datetime

from learnhub.models.enums import EarningSource
from learnhub.schemas.base_schema import CamelModel

class ReferralInfo(CamelModel):
    referral_code: str
    referral_link: str
    referred_count: int = Field(..., description="Number of users who signed up with this code")
    earnings: float = Field(..., description="Current spendable balance")

# --- Earning Schemas ---
class EarningCreate(CamelModel):
    user_id: int # The user being credited
    amount: float = Field(..., gt=0)
    source: EarningSource
    related_user_id: Optional[int] = None
    course_id: Optional[int] = None

class EarningDisplay(EarningCreate):
    id: int
    created_at: Optional[datetime] = None
