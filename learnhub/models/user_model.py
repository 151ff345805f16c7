from sqlalchemy import Column, Integer, String, Float, TIMESTAMP, Enum as SAEnum, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from learnhub.core.database import Base
from learnhub.models.enums import UserRole

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)

    role = Column(SAEnum(UserRole, name="user_role_enum", values_callable=lambda obj: [e.value for e in obj]),
                  nullable=False, default=UserRole.STUDENT)

    referral_code = Column(String(64), nullable=False, index=True) # User's own referral code
    referred_by = Column(String(64), nullable=True) # Referral code used at sign-up, if any

    # Spendable balance: credited by the earnings ledger, decremented by paid payouts
    earnings = Column(Float, nullable=False, default=0.0)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    courses_owned = relationship("Course", back_populates="educator")
    enrollments = relationship("Enrollment", back_populates="user")
    payouts = relationship("Payout", back_populates="user", foreign_keys="[Payout.user_id]")

    __table_args__ = (
        UniqueConstraint('username', name='uq_user_username'),
        UniqueConstraint('referral_code', name='uq_user_referral_code'),
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
