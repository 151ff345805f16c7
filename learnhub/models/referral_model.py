from sqlalchemy import (
    Column, Integer, Float, ForeignKey, TIMESTAMP,
    Enum as SAEnum, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from learnhub.core.database import Base
from learnhub.models.enums import EarningSource

class Earning(Base):
    """
    Ledger of credits to a user's earnings balance.
    User.earnings is the running total of these rows minus paid payouts.
    """
    __tablename__ = "earnings"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True) # The user who was credited
    related_user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True) # Referred user or buying student
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=True, index=True) # Course sale that triggered it, if any

    amount = Column(Float, nullable=False)
    source = Column(SAEnum(EarningSource, name="earning_source_enum", values_callable=lambda obj: [e.value for e in obj]),
                    nullable=False, index=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    earning_user = relationship("User", foreign_keys=[user_id])
    related_user = relationship("User", foreign_keys=[related_user_id])

    __table_args__ = (
        Index("idx_earning_user_source", "user_id", "source"),
    )

    def __repr__(self):
        return (f"<Earning(id={self.id}, user_id={self.user_id}, amount={self.amount}, "
                f"source='{self.source}', related_user_id={self.related_user_id})>")
