from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import datetime, timezone
from typing import Optional

from learnhub.models.course_model import Course
from learnhub.models.enrollment_model import Enrollment
from learnhub.models.analytics_model import CourseAnalytics
from learnhub.models.enums import UserRole, PayoutStatus

from learnhub.schemas import admin_schema as schemas # For response models
from learnhub.crud import user_crud, referral_crud, payout_crud

import logging
logger = logging.getLogger(__name__)

def get_course_analytics(db: Session, course_id: int) -> Optional[CourseAnalytics]:
    logger.debug(f"Fetching analytics snapshot for course_id {course_id}")
    return db.query(CourseAnalytics).filter(CourseAnalytics.course_id == course_id).first()

def refresh_course_analytics(db: Session, course_id: int) -> CourseAnalytics:
    """
    Recomputes a course's analytics from its enrollments and sale earnings
    and stores the snapshot (one row per course, created on first refresh).
    """
    logger.debug(f"Refreshing analytics for course_id {course_id}")

    enrollments = db.query(Enrollment).filter(Enrollment.course_id == course_id).all()
    total_students = len(enrollments)
    completed_students = sum(1 for e in enrollments if e.completed)
    active_students = sum(1 for e in enrollments if not e.completed and e.progress > 0)

    average_progress = 0.0
    completion_rate = 0.0
    if total_students > 0:
        average_progress = round(sum(e.progress for e in enrollments) / total_students, 2)
        completion_rate = round(completed_students / total_students * 100, 2)

    revenue = round(referral_crud.sum_course_sales(db, course_id), 2)

    snapshot = get_course_analytics(db, course_id)
    if not snapshot:
        snapshot = CourseAnalytics(course_id=course_id)
        db.add(snapshot)

    snapshot.total_students = total_students
    snapshot.active_students = active_students
    snapshot.completed_students = completed_students
    snapshot.average_progress = average_progress
    snapshot.completion_rate = completion_rate
    snapshot.revenue = revenue
    snapshot.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(snapshot)
    logger.info(f"Course {course_id} analytics: {total_students} students, {completion_rate}% completed, revenue {revenue:.2f}.")
    return snapshot

def get_platform_stats(db: Session) -> schemas.PlatformStatsOverview:
    logger.debug("Calculating platform stats overview.")

    total_enrollments = db.query(func.count(Enrollment.id)).scalar() or 0
    completed_enrollments = db.query(func.count(Enrollment.id)).filter(Enrollment.completed.is_(True)).scalar() or 0

    return schemas.PlatformStatsOverview(
        total_users=user_crud.count_users(db), # Reusing existing CRUD
        total_students=user_crud.count_users(db, role=UserRole.STUDENT),
        total_educators=user_crud.count_users(db, role=UserRole.EDUCATOR),
        total_courses=db.query(func.count(Course.id)).scalar() or 0,
        total_enrollments=total_enrollments,
        completed_enrollments=completed_enrollments,
        pending_payouts=payout_crud.count_payouts(db, PayoutStatus.PENDING),
        pending_payout_amount=round(payout_crud.sum_payouts(db, PayoutStatus.PENDING), 2),
        total_paid_out=round(payout_crud.sum_payouts(db, PayoutStatus.PAID), 2),
        total_earnings_credited=round(referral_crud.sum_all_earnings(db), 2),
    )
