# Python client for the LearnHub API and the dashboard views built on it.

from .api import ApiError, LearnHubClient, QueryCache
from .dashboards import (
    StudentDashboard,
    EducatorDashboard,
    build_student_dashboard,
    build_educator_dashboard,
    render_student_dashboard,
    render_educator_dashboard,
)

__all__ = [
    "ApiError",
    "LearnHubClient",
    "QueryCache",
    "StudentDashboard",
    "EducatorDashboard",
    "build_student_dashboard",
    "build_educator_dashboard",
    "render_student_dashboard",
    "render_educator_dashboard",
]
