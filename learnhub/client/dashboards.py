"""
Dashboard pages built from LearnHubClient queries.

The builders only read through the client, so repeated builds reuse cached
queries until a mutation invalidates them.
"""
import logging
from typing import List, Optional

from pydantic import BaseModel

from learnhub.client.api import LearnHubClient

logger = logging.getLogger(__name__)


# --- View models ---
class EnrolledCourseView(BaseModel):
    course_id: int
    title: str
    progress: int
    completed: bool

class StudentDashboard(BaseModel):
    username: str
    courses: List[EnrolledCourseView]
    completed_courses: int
    quiz_attempts: int
    average_quiz_score: Optional[float] = None # None until the first attempt
    referral_code: str
    earnings: float
    unread_notifications: int

class CourseStatsView(BaseModel):
    course_id: int
    title: str
    price: float
    total_students: int
    completion_rate: float
    revenue: float

class EducatorDashboard(BaseModel):
    username: str
    courses: List[CourseStatsView]
    total_students: int
    average_completion_rate: float
    earnings: float
    unread_notifications: int


# --- Builders ---
def build_student_dashboard(client: LearnHubClient) -> StudentDashboard:
    user = client.current_user()
    titles = {course.id: course.title for course in client.courses()}

    courses = [
        EnrolledCourseView(
            course_id=enrollment.course_id,
            title=titles.get(enrollment.course_id, f"Course {enrollment.course_id}"),
            progress=enrollment.progress,
            completed=enrollment.completed,
        )
        for enrollment in client.enrollments()
    ]

    attempts = client.quiz_attempts()
    average_score = None
    if attempts:
        average_score = round(sum(attempt.score for attempt in attempts) / len(attempts), 2)

    referral = client.referral_info()
    return StudentDashboard(
        username=user.username,
        courses=courses,
        completed_courses=sum(1 for course in courses if course.completed),
        quiz_attempts=len(attempts),
        average_quiz_score=average_score,
        referral_code=referral.referral_code,
        earnings=referral.earnings,
        unread_notifications=len(client.notifications(unread_only=True)),
    )


def build_educator_dashboard(client: LearnHubClient) -> EducatorDashboard:
    user = client.current_user()

    courses = []
    for course in client.educator_courses():
        analytics = client.course_analytics(course.id)
        courses.append(CourseStatsView(
            course_id=course.id,
            title=course.title,
            price=course.price,
            total_students=analytics.total_students,
            completion_rate=analytics.completion_rate,
            revenue=analytics.revenue,
        ))

    average_completion = 0.0
    if courses:
        average_completion = round(sum(course.completion_rate for course in courses) / len(courses), 2)

    referral = client.referral_info()
    logger.debug(f"Built educator dashboard for {user.username} with {len(courses)} courses")
    return EducatorDashboard(
        username=user.username,
        courses=courses,
        total_students=sum(course.total_students for course in courses),
        average_completion_rate=average_completion,
        earnings=referral.earnings,
        unread_notifications=len(client.notifications(unread_only=True)),
    )


# --- Plain-text rendering ---
def render_student_dashboard(dashboard: StudentDashboard) -> str:
    lines = [f"Welcome back, {dashboard.username}!", ""]
    lines.append(f"My courses ({dashboard.completed_courses}/{len(dashboard.courses)} completed)")
    if not dashboard.courses:
        lines.append("  You are not enrolled in any course yet.")
    for course in dashboard.courses:
        marker = "[done]" if course.completed else f"[{course.progress}%]"
        lines.append(f"  {marker} {course.title}")

    lines.append("")
    if dashboard.average_quiz_score is None:
        lines.append("Quizzes: no attempts yet")
    else:
        lines.append(f"Quizzes: {dashboard.quiz_attempts} attempts, average score {dashboard.average_quiz_score:g}")
    lines.append(f"Referral code: {dashboard.referral_code}")
    lines.append(f"Earnings: {dashboard.earnings:.2f}")
    lines.append(f"Unread notifications: {dashboard.unread_notifications}")
    return "\n".join(lines)


def render_educator_dashboard(dashboard: EducatorDashboard) -> str:
    lines = [f"Educator dashboard: {dashboard.username}", ""]
    if not dashboard.courses:
        lines.append("  No courses yet.")
    for course in dashboard.courses:
        lines.append(
            f"  {course.title} (price {course.price:.2f}): {course.total_students} students, "
            f"{course.completion_rate:g}% completed, revenue {course.revenue:.2f}"
        )
    lines.append("")
    lines.append(f"Total students: {dashboard.total_students}")
    lines.append(f"Average completion rate: {dashboard.average_completion_rate:g}%")
    lines.append(f"Earnings: {dashboard.earnings:.2f}")
    lines.append(f"Unread notifications: {dashboard.unread_notifications}")
    return "\n".join(lines)
