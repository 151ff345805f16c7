"""
Client data layer for the LearnHub API.

LearnHubClient wraps any httpx.Client (FastAPI's TestClient included) that
keeps the session cookie between calls. Queries are cached by tuple keys such
as ("/api/courses", 3, "quizzes"); each mutation invalidates the key prefixes
it can affect, so the next query refetches.
"""
import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic.alias_generators import to_camel

from learnhub.schemas import (
    CourseDisplay as Course,
    CourseAnalyticsDisplay as CourseAnalytics,
    EarningDisplay as Earning,
    EnrollmentDisplay as Enrollment,
    NotificationDisplay as Notification,
    PayoutDisplay as Payout,
    QuizAttemptDisplay as QuizAttempt,
    QuizDisplay as Quiz,
    ReferralInfo,
    UserDisplay as User,
)

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]
M = TypeVar("M", bound=BaseModel)


class ApiError(RuntimeError):
    """A non-2xx response from the API."""

    def __init__(self, status_code: int, message: str, reason: Optional[str] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.reason = reason


class QueryCache:
    def __init__(self):
        self._entries: Dict[QueryKey, Any] = {}

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> List[QueryKey]:
        return list(self._entries)

    def get(self, key: QueryKey, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = value

    def get_or_fetch(self, key: QueryKey, fetch: Callable[[], Any]) -> Any:
        if key in self._entries:
            return self._entries[key]
        value = fetch()
        self._entries[key] = value
        return value

    def invalidate(self, *prefixes: QueryKey) -> int:
        """Drops every key that starts with one of the prefixes; returns how many were dropped."""
        stale = [
            key for key in self._entries
            if any(key[:len(prefix)] == prefix for prefix in prefixes)
        ]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached queries for prefixes {prefixes}")
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


class LearnHubClient:
    def __init__(self, http: httpx.Client, cache: Optional[QueryCache] = None):
        self.http = http
        self.cache = cache if cache is not None else QueryCache()

    # =========================================================
    # INTERNAL
    # =========================================================
    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self.http.request(method, path, **kwargs)
        if not response.is_success:
            message, reason = response.reason_phrase, None
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message") or message
                reason = body.get("reason")
            logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message, reason)
        if not response.content:
            return None
        return response.json()

    def _query(self, key: QueryKey, path: str, model: Type[M], params: Optional[dict] = None) -> M:
        return self.cache.get_or_fetch(
            key, lambda: model.model_validate(self._request("GET", path, params=params))
        )

    def _query_list(self, key: QueryKey, path: str, model: Type[M], params: Optional[dict] = None) -> List[M]:
        adapter = TypeAdapter(List[model])
        return self.cache.get_or_fetch(
            key, lambda: adapter.validate_python(self._request("GET", path, params=params))
        )

    # =========================================================
    # SESSION
    # =========================================================
    def register(
        self,
        username: str,
        password: str,
        role: str = "student",
        email: Optional[str] = None,
        referral_code: Optional[str] = None,
    ) -> User:
        payload = {"username": username, "password": password, "role": role}
        if email:
            payload["email"] = email
        if referral_code:
            payload["referralCode"] = referral_code
        user = User.model_validate(self._request("POST", "/api/register", json=payload))
        self.cache.clear()
        self.cache.set(("/api/user",), user)
        return user

    def login(self, username: str, password: str) -> User:
        user = User.model_validate(
            self._request("POST", "/api/login", json={"username": username, "password": password})
        )
        self.cache.clear()
        self.cache.set(("/api/user",), user)
        return user

    def logout(self) -> None:
        self._request("POST", "/api/logout")
        self.cache.clear()

    def current_user(self) -> User:
        return self._query(("/api/user",), "/api/user", User)

    # =========================================================
    # QUERIES
    # =========================================================
    def courses(self) -> List[Course]:
        return self._query_list(("/api/courses",), "/api/courses", Course)

    def course(self, course_id: int) -> Course:
        return self._query(("/api/courses", course_id), f"/api/courses/{course_id}", Course)

    def educator_courses(self) -> List[Course]:
        return self._query_list(("/api/educator/courses",), "/api/educator/courses", Course)

    def course_quizzes(self, course_id: int) -> List[Quiz]:
        return self._query_list(
            ("/api/courses", course_id, "quizzes"), f"/api/courses/{course_id}/quizzes", Quiz
        )

    def course_students(self, course_id: int) -> List[Enrollment]:
        return self._query_list(
            ("/api/courses", course_id, "students"), f"/api/courses/{course_id}/students", Enrollment
        )

    def course_analytics(self, course_id: int) -> CourseAnalytics:
        return self._query(
            ("/api/courses", course_id, "analytics"), f"/api/courses/{course_id}/analytics", CourseAnalytics
        )

    def enrollments(self) -> List[Enrollment]:
        return self._query_list(("/api/enrollments",), "/api/enrollments", Enrollment)

    def enrollment(self, course_id: int) -> Optional[Enrollment]:
        """The caller's enrollment in a course, or None when not enrolled."""
        key = ("/api/enrollments", course_id)
        if key in self.cache:
            return self.cache.get(key)
        try:
            enrollment = Enrollment.model_validate(self._request("GET", f"/api/enrollments/{course_id}"))
        except ApiError as exc:
            if exc.status_code != 404:
                raise
            enrollment = None
        self.cache.set(key, enrollment)
        return enrollment

    def quiz_attempts(self) -> List[QuizAttempt]:
        return self._query_list(("/api/quiz-attempts",), "/api/quiz-attempts", QuizAttempt)

    def notifications(self, unread_only: bool = False) -> List[Notification]:
        params = {"unreadOnly": "true"} if unread_only else None
        return self._query_list(("/api/notifications", unread_only), "/api/notifications", Notification, params=params)

    def referral_info(self) -> ReferralInfo:
        return self._query(("/api/referrals/me",), "/api/referrals/me", ReferralInfo)

    def earnings(self) -> List[Earning]:
        return self._query_list(("/api/earnings",), "/api/earnings", Earning)

    def payouts(self) -> List[Payout]:
        return self._query_list(("/api/payouts",), "/api/payouts", Payout)

    def admin_payouts(self, status: Optional[str] = None) -> List[Payout]:
        params = {"status": status} if status else None
        return self._query_list(("/api/admin/payouts", status), "/api/admin/payouts", Payout, params=params)

    # =========================================================
    # MUTATIONS
    # =========================================================
    def create_course(
        self,
        title: str,
        description: str,
        video_url: str,
        price: float = 0.0,
        thumbnail: Optional[Tuple[str, bytes, str]] = None,
    ) -> Course:
        """thumbnail, if given, is an httpx file tuple: (filename, content, content_type)."""
        data = {"title": title, "description": description, "videoUrl": video_url, "price": str(price)}
        files = {"thumbnail": thumbnail} if thumbnail else None
        course = Course.model_validate(self._request("POST", "/api/courses", data=data, files=files))
        self.cache.invalidate(("/api/courses",), ("/api/educator/courses",))
        return course

    def update_course(self, course_id: int, **fields) -> Course:
        course = Course.model_validate(self._request("PATCH", f"/api/courses/{course_id}", json={to_camel(name): value for name, value in fields.items()}))
        self.cache.invalidate(("/api/courses",), ("/api/educator/courses",))
        return course

    def create_quiz(self, course_id: int, title: str, questions: Iterable[str], answers: Iterable[str]) -> Quiz:
        payload = {"courseId": course_id, "title": title, "questions": list(questions), "answers": list(answers)}
        quiz = Quiz.model_validate(self._request("POST", "/api/quizzes", json=payload))
        self.cache.invalidate(("/api/courses", course_id, "quizzes"))
        return quiz

    def enroll(self, course_id: int) -> Enrollment:
        enrollment = Enrollment.model_validate(
            self._request("POST", "/api/enrollments", json={"courseId": course_id})
        )
        self.cache.invalidate(("/api/enrollments",), ("/api/courses", course_id))
        return enrollment

    def update_progress(self, enrollment_id: int, progress: int) -> Enrollment:
        enrollment = Enrollment.model_validate(
            self._request("PATCH", f"/api/enrollments/{enrollment_id}/progress", json={"progress": progress})
        )
        self.cache.invalidate(("/api/enrollments",), ("/api/courses", enrollment.course_id))
        return enrollment

    def submit_quiz_attempt(
        self, quiz_id: int, score: int, answers: Iterable[str] = (), time_spent: int = 0
    ) -> QuizAttempt:
        payload = {"quizId": quiz_id, "score": score, "answers": list(answers), "timeSpent": time_spent}
        attempt = QuizAttempt.model_validate(self._request("POST", "/api/quiz-attempts", json=payload))
        self.cache.invalidate(("/api/quiz-attempts",))
        return attempt

    def request_payout(self, amount: float, payment_method: Optional[str] = None) -> Payout:
        payload = {"amount": amount}
        if payment_method:
            payload["paymentMethod"] = payment_method
        payout = Payout.model_validate(self._request("POST", "/api/payouts/request", json=payload))
        self.cache.invalidate(("/api/payouts",), ("/api/admin/payouts",))
        return payout

    def process_payout(self, payout_id: int, status: str, transaction_id: Optional[str] = None) -> Payout:
        payload = {"status": status}
        if transaction_id:
            payload["transactionId"] = transaction_id
        payout = Payout.model_validate(
            self._request("PATCH", f"/api/admin/payouts/{payout_id}/process", json=payload)
        )
        self.cache.invalidate(("/api/admin/payouts",), ("/api/payouts",))
        return payout

    def mark_notification_read(self, notification_id: int) -> Notification:
        notification = Notification.model_validate(
            self._request("PATCH", f"/api/notifications/{notification_id}/read")
        )
        self.cache.invalidate(("/api/notifications",))
        return notification

