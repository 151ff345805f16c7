from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from learnhub.models.enums import PayoutStatus
from learnhub.schemas.base_schema import CamelModel

class PayoutRequest(CamelModel):
    amount: float = Field(..., gt=0, description="Amount to withdraw; must not exceed current earnings")
    payment_method: Optional[str] = Field(None, max_length=100)

# Admin action on a pending payout
class PayoutProcess(CamelModel):
    status: PayoutStatus
    transaction_id: Optional[str] = Field(None, max_length=255)

    @field_validator("status")
    @classmethod
    def status_must_be_terminal(cls, value: PayoutStatus) -> PayoutStatus:
        if value == PayoutStatus.PENDING:
            raise ValueError("status must be 'paid' or 'failed'")
        return value

class PayoutDisplay(CamelModel):
    id: int
    user_id: int
    amount: float
    status: PayoutStatus
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    processed_by_id: Optional[int] = None
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
