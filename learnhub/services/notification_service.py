import logging
from typing import Iterable

from sqlalchemy.orm import Session

from learnhub.crud import notification_crud, enrollment_crud
from learnhub.models.enums import NotificationType
from learnhub.schemas.notification_schema import NotificationCreate

logger = logging.getLogger(__name__)


def notify(db: Session, user_id: int, title: str, message: str, type: NotificationType = NotificationType.SYSTEM):
    return notification_crud.create_notification(
        db, NotificationCreate(user_id=user_id, title=title, message=message, type=type)
    )


def notify_many(db: Session, user_ids: Iterable[int], title: str, message: str, type: NotificationType) -> int:
    count = 0
    for user_id in user_ids:
        notify(db, user_id, title, message, type)
        count += 1
    return count


def notify_new_enrollment(db: Session, course, student) -> None:
    notify(
        db, course.educator_id,
        title="New student enrolled",
        message=f"{student.username} enrolled in '{course.title}'.",
        type=NotificationType.ENROLLMENT,
    )


def notify_live_class_scheduled(db: Session, course, live_class) -> int:
    """Notifies every student enrolled in the course; returns how many were notified."""
    student_ids = [e.user_id for e in enrollment_crud.get_course_enrollments(db, course.id)]
    sent = notify_many(
        db, student_ids,
        title="Live class scheduled",
        message=f"'{live_class.title}' for '{course.title}' starts at {live_class.scheduled_at:%Y-%m-%d %H:%M}.",
        type=NotificationType.LIVE_CLASS,
    )
    logger.info(f"Notified {sent} students of live class {live_class.id} in course {course.id}.")
    return sent


def notify_submission_graded(db: Session, submission, assignment) -> None:
    notify(
        db, submission.user_id,
        title="Assignment graded",
        message=f"Your submission for '{assignment.title}' was graded {submission.grade}/{assignment.max_score}.",
        type=NotificationType.GRADE,
    )


def notify_discussion_reply(db: Session, discussion, reply, replier) -> None:
    if discussion.user_id == reply.user_id:
        return # No notification for replying to your own thread
    notify(
        db, discussion.user_id,
        title="New reply",
        message=f"{replier.username} replied to '{discussion.title}'.",
        type=NotificationType.REPLY,
    )


def notify_earning_credited(db: Session, earning) -> None:
    notify(
        db, earning.user_id,
        title="Earnings credited",
        message=f"{earning.amount:.2f} was added to your earnings ({earning.source.value.replace('_', ' ')}).",
        type=NotificationType.EARNING,
    )


def notify_payout_processed(db: Session, payout) -> None:
    notify(
        db, payout.user_id,
        title=f"Payout {payout.status.value}",
        message=f"Your payout request of {payout.amount:.2f} was marked {payout.status.value}.",
        type=NotificationType.PAYOUT,
    )
