import pytest

from learnhub.client import (
    ApiError,
    LearnHubClient,
    QueryCache,
    build_educator_dashboard,
    build_student_dashboard,
    render_educator_dashboard,
    render_student_dashboard,
)

from conftest import PASSWORD


@pytest.fixture
def make_client(new_client):
    def _make_client():
        return LearnHubClient(new_client())
    return _make_client


def test_query_cache_prefix_invalidation():
    cache = QueryCache()
    cache.set(("/api/courses",), "all")
    cache.set(("/api/courses", 3), "three")
    cache.set(("/api/courses", 3, "quizzes"), "quizzes")
    cache.set(("/api/courses", 4, "quizzes"), "other")
    cache.set(("/api/enrollments",), "mine")

    assert cache.invalidate(("/api/courses", 3)) == 2
    assert cache.keys() == [("/api/courses",), ("/api/courses", 4, "quizzes"), ("/api/enrollments",)]

    assert cache.invalidate(("/api/courses",), ("/api/nothing",)) == 2
    assert cache.keys() == [("/api/enrollments",)]


def test_query_cache_get_or_fetch_calls_once():
    cache = QueryCache()
    calls = []

    def fetch():
        calls.append(1)
        return "value"

    assert cache.get_or_fetch(("k",), fetch) == "value"
    assert cache.get_or_fetch(("k",), fetch) == "value"
    assert len(calls) == 1


def test_errors_are_raised_as_api_error(make_client):
    client = make_client()
    with pytest.raises(ApiError) as exc_info:
        client.current_user()
    assert exc_info.value.status_code == 401
    assert exc_info.value.reason == "unauthenticated"

    client.register("alice", PASSWORD)
    with pytest.raises(ApiError) as exc_info:
        client.create_course("Nope", "Students cannot teach", "https://video.test/x")
    assert exc_info.value.status_code == 403
    assert exc_info.value.message.startswith("Requires one of the roles")


def test_queries_are_cached_until_a_mutation_invalidates_them(make_client):
    instructor = make_client()
    instructor.register("edna", PASSWORD, role="educator")
    course = instructor.create_course("Python 101", "Learn Python", "https://video.test/py")
    instructor.create_quiz(course.id, "Basics", ["2+2?"], ["4"])

    student = make_client()
    student.register("sam", PASSWORD)
    assert [c.title for c in student.courses()] == ["Python 101"]
    assert student.enrollment(course.id) is None
    assert [q.title for q in student.course_quizzes(course.id)] == ["Basics"]
    assert ("/api/courses", course.id, "quizzes") in student.cache

    # Created by someone else: the cached catalog is stale until invalidated
    instructor.create_course("Rust 101", "Learn Rust", "https://video.test/rs")
    assert len(student.courses()) == 1

    enrollment = student.enroll(course.id)
    assert ("/api/courses", course.id, "quizzes") not in student.cache
    assert ("/api/enrollments", course.id) not in student.cache
    assert student.enrollment(course.id).id == enrollment.id

    student.cache.invalidate(("/api/courses",))
    assert len(student.courses()) == 2


def test_update_progress_refreshes_enrollments(make_client):
    instructor = make_client()
    instructor.register("edna", PASSWORD, role="educator")
    course = instructor.create_course("Python 101", "Learn Python", "https://video.test/py")

    student = make_client()
    student.register("sam", PASSWORD)
    enrollment = student.enroll(course.id)
    assert student.enrollments()[0].progress == 0

    updated = student.update_progress(enrollment.id, 100)
    assert updated.completed is True
    assert student.enrollments()[0].completed is True
    assert student.enrollment(course.id).progress == 100


def test_payout_mutations_invalidate_payout_queries(make_client, admin):
    referrer = make_client()
    referrer.register("rita", PASSWORD)
    make_client().register("bob", PASSWORD, referral_code=referrer.current_user().referral_code)

    assert referrer.payouts() == []
    payout = referrer.request_payout(20, payment_method="upi")
    assert [p.id for p in referrer.payouts()] == [payout.id]

    staff = LearnHubClient(admin.client)
    assert [p.id for p in staff.admin_payouts("pending")] == [payout.id]
    processed = staff.process_payout(payout.id, "paid", transaction_id="tx-1")
    assert processed.status.value == "paid"
    assert staff.admin_payouts("pending") == []

    referrer.cache.invalidate(("/api/user",), ("/api/referrals/me",))
    assert referrer.current_user().earnings == pytest.approx(30.0)


def test_mark_notification_read_refreshes_notifications(make_client):
    instructor = make_client()
    instructor.register("edna", PASSWORD, role="educator")
    course = instructor.create_course("Python 101", "Learn Python", "https://video.test/py")
    make_client().register("sam", PASSWORD)
    student = make_client()
    student.login("sam", PASSWORD)
    student.enroll(course.id)

    [unread] = instructor.notifications(unread_only=True)
    instructor.mark_notification_read(unread.id)
    assert instructor.notifications(unread_only=True) == []


def test_logout_clears_cache(make_client):
    client = make_client()
    client.register("alice", PASSWORD)
    client.courses()
    assert len(client.cache) > 0
    client.logout()
    assert len(client.cache) == 0
    with pytest.raises(ApiError):
        client.courses()


def test_student_dashboard(make_client):
    instructor = make_client()
    instructor.register("edna", PASSWORD, role="educator")
    first = instructor.create_course("Python 101", "Learn Python", "https://video.test/py")
    second = instructor.create_course("Rust 101", "Learn Rust", "https://video.test/rs")
    quiz = instructor.create_quiz(first.id, "Basics", ["2+2?"], ["4"])

    student = make_client()
    student.register("sam", PASSWORD)
    done = student.enroll(first.id)
    student.enroll(second.id)
    student.update_progress(done.id, 100)
    student.submit_quiz_attempt(quiz.id, 80, ["4"], time_spent=30)
    student.submit_quiz_attempt(quiz.id, 100, ["4"], time_spent=20)

    dashboard = build_student_dashboard(student)
    assert dashboard.username == "sam"
    assert [(c.title, c.progress, c.completed) for c in dashboard.courses] == [
        ("Python 101", 100, True),
        ("Rust 101", 0, False),
    ]
    assert dashboard.completed_courses == 1
    assert dashboard.quiz_attempts == 2
    assert dashboard.average_quiz_score == 90.0
    assert dashboard.referral_code.startswith("REF")
    assert dashboard.earnings == 0.0
    assert dashboard.unread_notifications == 0

    text = render_student_dashboard(dashboard)
    assert "Welcome back, sam!" in text
    assert "My courses (1/2 completed)" in text
    assert "[done] Python 101" in text
    assert "[0%] Rust 101" in text
    assert "average score 90" in text


def test_educator_dashboard(make_client):
    instructor = make_client()
    instructor.register("edna", PASSWORD, role="educator")
    course = instructor.create_course("Python 101", "Learn Python", "https://video.test/py", price=100)
    instructor.create_course("Draft", "Not launched", "https://video.test/d")

    for name, progress in (("sam", 100), ("tom", 50)):
        student = make_client()
        student.register(name, PASSWORD)
        enrollment = student.enroll(course.id)
        student.update_progress(enrollment.id, progress)

    dashboard = build_educator_dashboard(instructor)
    assert dashboard.username == "edna"
    assert [(c.title, c.total_students, c.completion_rate) for c in dashboard.courses] == [
        ("Python 101", 2, 50.0),
        ("Draft", 0, 0.0),
    ]
    assert dashboard.total_students == 2
    assert dashboard.average_completion_rate == 25.0
    assert dashboard.earnings == pytest.approx(160.0)
    assert dashboard.unread_notifications == 4 # Two enrollments and two sale credits

    text = render_educator_dashboard(dashboard)
    assert "Educator dashboard: edna" in text
    assert "Python 101 (price 100.00): 2 students, 50% completed, revenue 160.00" in text
    assert dashboard.courses[1].revenue == 0.0


def test_empty_dashboards_render(make_client):
    client = make_client()
    client.register("edna", PASSWORD, role="educator")
    assert "No courses yet." in render_educator_dashboard(build_educator_dashboard(client))

    other = make_client()
    other.register("sam", PASSWORD)
    text = render_student_dashboard(build_student_dashboard(other))
    assert "You are not enrolled in any course yet." in text
    assert "Quizzes: no attempts yet" in text
