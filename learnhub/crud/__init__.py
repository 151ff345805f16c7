# This file makes the 'crud' directory a Python package.
# Each module is the repository for one entity family; every function takes the
# request's SQLAlchemy Session explicitly.

from .user_crud import (
    get_user_by_id,
    get_user_by_username,
    get_user_by_referral_code,
    create_user,
    get_users,
    count_users,
    count_referred_users,
    adjust_user_earnings,
)

from .course_crud import (
    create_course, get_course, get_courses, get_educator_courses, update_course, set_course_thumbnail,
    create_material, get_material, get_course_materials,
    create_live_class, get_live_class, get_course_live_classes, update_live_class_status,
)

from .quiz_crud import (
    create_quiz, get_quiz, get_course_quizzes,
    create_quiz_attempt, get_user_quiz_attempts, get_quiz_attempts,
)

from .enrollment_crud import (
    create_enrollment, get_enrollment, get_enrollment_by_id,
    get_user_enrollments, get_course_enrollments, update_enrollment_progress,
)

from .assignment_crud import (
    create_assignment, get_assignment, get_course_assignments,
    create_submission, get_submission, get_assignment_submissions, get_user_submissions, grade_submission,
)

from .discussion_crud import (
    create_discussion, get_discussion, get_course_discussions,
    create_reply, get_discussion_replies,
)

from .notification_crud import (
    create_notification, get_notification, get_user_notifications, count_unread, mark_notification_read,
)

from .analytics_crud import refresh_course_analytics, get_course_analytics, get_platform_stats

from .referral_crud import credit_earning, get_user_earnings

from .payout_crud import (
    create_payout, get_payout, get_user_payouts, get_payouts, process_payout,
)
