from sqlalchemy import (
    Column, Integer, String, Float, ForeignKey, TIMESTAMP,
    Enum as SAEnum
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from learnhub.core.database import Base
from learnhub.models.enums import PayoutStatus

class Payout(Base):
    __tablename__ = "payouts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True) # Requester

    amount = Column(Float, nullable=False)
    status = Column(SAEnum(PayoutStatus, name="payout_status_enum", values_callable=lambda obj: [e.value for e in obj]),
                    nullable=False, default=PayoutStatus.PENDING, index=True)

    payment_method = Column(String(100), nullable=True) # e.g. "upi", "bank_transfer"
    transaction_id = Column(String(255), nullable=True) # Reference supplied by the admin when marking paid

    processed_by_id = Column(Integer, ForeignKey("users.id"), nullable=True) # Admin who processed it
    processed_at = Column(TIMESTAMP(timezone=True), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="payouts", foreign_keys=[user_id])
    processed_by = relationship("User", foreign_keys=[processed_by_id])

    def __repr__(self):
        return f"<Payout(id={self.id}, user_id={self.user_id}, amount={self.amount}, status='{self.status}')>"
