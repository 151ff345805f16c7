"""
Earnings credited by platform events: referral sign-ups and course purchases.
Payment collection itself is out of scope; an enrollment in a paid course is
treated as a completed purchase.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from learnhub.crud import referral_crud, user_crud
from learnhub.models.enums import EarningSource
from learnhub.schemas.referral_schema import EarningCreate
from learnhub.services import notification_service

logger = logging.getLogger(__name__)


def _credit(db: Session, earning_in: EarningCreate):
    earning = referral_crud.credit_earning(db, earning_in)
    notification_service.notify_earning_credited(db, earning)
    return earning


def apply_signup_referral(db: Session, new_user, referrer, settings):
    """Credits the referrer's sign-up bonus. Returns the Earning, or None when the bonus is disabled."""
    bonus = round(settings.REFERRAL_SIGNUP_BONUS, 2)
    if bonus <= 0:
        logger.debug("Referral sign-up bonus disabled; nothing credited.")
        return None
    logger.info(f"User {new_user.username} signed up with {referrer.username}'s code; crediting bonus {bonus:.2f}.")
    return _credit(db, EarningCreate(
        user_id=referrer.id,
        amount=bonus,
        source=EarningSource.REFERRAL_SIGNUP,
        related_user_id=new_user.id,
    ))


def apply_course_purchase(db: Session, student, course, settings) -> List:
    """
    Splits a paid course's price on enrollment:
    the educator gets price * (1 - PLATFORM_FEE_RATE); the student's referrer,
    if any, gets price * REFERRAL_COMMISSION_RATE. Free courses credit nothing.
    """
    credited = []
    if not course.price or course.price <= 0:
        return credited
    if student.id == course.educator_id:
        logger.debug(f"Educator {student.id} enrolled in own course {course.id}; nothing credited.")
        return credited

    educator_share = round(course.price * (1 - settings.PLATFORM_FEE_RATE), 2)
    if educator_share > 0:
        credited.append(_credit(db, EarningCreate(
            user_id=course.educator_id,
            amount=educator_share,
            source=EarningSource.COURSE_SALE,
            related_user_id=student.id,
            course_id=course.id,
        )))

    if student.referred_by:
        referrer = user_crud.get_user_by_referral_code(db, student.referred_by)
        commission = round(course.price * settings.REFERRAL_COMMISSION_RATE, 2)
        if referrer and commission > 0:
            credited.append(_credit(db, EarningCreate(
                user_id=referrer.id,
                amount=commission,
                source=EarningSource.REFERRAL_COMMISSION,
                related_user_id=student.id,
                course_id=course.id,
            )))
        elif not referrer:
            logger.warning(f"Referral code {student.referred_by} of user {student.id} no longer resolves; no commission.")

    logger.info(f"Course {course.id} purchase by user {student.id}: {len(credited)} earnings credited.")
    return credited
