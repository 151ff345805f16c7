import pytest

from conftest import create_course, enroll, register


QUIZ = {"title": "Basics", "questions": ["2+2?", "Capital of France?"], "answers": ["4", "Paris"]}


# --- Enrollments ---

def test_enroll_in_unknown_course(student):
    response = student.client.post("/api/enrollments", json={"courseId": 999})
    assert response.status_code == 404


def test_enrollment_notifies_the_educator(educator, student, course):
    enroll(student.client, course["id"])
    notifications = educator.client.get("/api/notifications").json()
    assert len(notifications) == 1
    assert notifications[0]["type"] == "enrollment"
    assert "sam" in notifications[0]["message"]


def test_read_my_enrollments(student, educator):
    first = create_course(educator.client, title="A")
    second = create_course(educator.client, title="B")
    enroll(student.client, first["id"])
    enroll(student.client, second["id"])

    mine = student.client.get("/api/enrollments").json()
    assert [e["courseId"] for e in mine] == [first["id"], second["id"]]

    one = student.client.get(f"/api/enrollments/{second['id']}")
    assert one.status_code == 200
    assert one.json()["courseId"] == second["id"]
    assert educator.client.get(f"/api/enrollments/{second['id']}").status_code == 404


@pytest.mark.parametrize("progress, completed", [(100, True), (99, False), (101, False), (-1, False), (0, False)])
def test_progress_endpoint_completion(student, course, progress, completed):
    enrollment = enroll(student.client, course["id"])
    response = student.client.patch(f"/api/enrollments/{enrollment['id']}/progress", json={"progress": progress})
    assert response.status_code == 200
    assert response.json()["progress"] == progress
    assert response.json()["completed"] is completed


def test_progress_update_requires_the_enrolled_user_or_admin(student, register_actor, admin, course):
    enrollment = enroll(student.client, course["id"])
    path = f"/api/enrollments/{enrollment['id']}/progress"

    stranger = register_actor("trudy")
    response = stranger.client.patch(path, json={"progress": 100})
    assert response.status_code == 403
    assert response.json()["reason"] == "forbidden_ownership"

    assert admin.client.patch(path, json={"progress": 100}).json()["completed"] is True


def test_progress_update_unknown_enrollment(student):
    response = student.client.patch("/api/enrollments/999/progress", json={"progress": 10})
    assert response.status_code == 404


def test_progress_must_be_an_integer(student, course):
    enrollment = enroll(student.client, course["id"])
    response = student.client.patch(f"/api/enrollments/{enrollment['id']}/progress", json={"progress": "lots"})
    assert response.status_code == 400


def test_paid_enrollment_credits_educator_and_referrer(educator, register_actor, new_client):
    course = create_course(educator.client, title="Premium", price=100)
    referrer = register_actor("rita")
    student_client = new_client()
    register(student_client, "sam", referralCode=referrer.user["referralCode"])

    enroll(student_client, course["id"])

    assert educator.client.get("/api/user").json()["earnings"] == pytest.approx(80.0)
    # Sign-up bonus plus the purchase commission
    assert referrer.client.get("/api/user").json()["earnings"] == pytest.approx(60.0)
    sources = sorted(e["source"] for e in referrer.client.get("/api/earnings").json())
    assert sources == ["referral_commission", "referral_signup"]

    sale = educator.client.get("/api/earnings").json()
    assert [(e["source"], e["courseId"]) for e in sale] == [("course_sale", course["id"])]
    analytics = educator.client.get(f"/api/courses/{course['id']}/analytics").json()
    assert analytics["revenue"] == pytest.approx(80.0)


def test_free_enrollment_credits_nothing(educator, student, course):
    enroll(student.client, course["id"])
    assert educator.client.get("/api/earnings").json() == []


# --- Quizzes ---

def test_create_quiz_and_hide_answers_from_students(educator, student, course):
    created = educator.client.post("/api/quizzes", json={"courseId": course["id"], **QUIZ})
    assert created.status_code == 201, created.text
    quiz = created.json()
    assert quiz["answers"] == ["4", "Paris"]

    listed = student.client.get(f"/api/courses/{course['id']}/quizzes").json()
    assert [q["id"] for q in listed] == [quiz["id"]]
    assert "answers" not in listed[0]
    assert listed[0]["questions"] == QUIZ["questions"]

    single = student.client.get(f"/api/quizzes/{quiz['id']}").json()
    assert "answers" not in single
    assert student.client.get("/api/quizzes/999").status_code == 404


def test_quiz_creation_rules(educator, other_educator, student, course):
    payload = {"courseId": course["id"], **QUIZ}
    assert student.client.post("/api/quizzes", json=payload).status_code == 403
    assert other_educator.client.post("/api/quizzes", json=payload).status_code == 403
    assert educator.client.post("/api/quizzes", json={**payload, "courseId": 999}).status_code == 404

    mismatched = educator.client.post("/api/quizzes", json={**payload, "answers": ["4"]})
    assert mismatched.status_code == 400


def test_quiz_attempts(educator, other_educator, student, course):
    quiz = educator.client.post("/api/quizzes", json={"courseId": course["id"], **QUIZ}).json()

    attempt = student.client.post(
        "/api/quiz-attempts", json={"quizId": quiz["id"], "score": 50, "answers": ["4", "Lyon"], "timeSpent": 42}
    )
    assert attempt.status_code == 201, attempt.text
    assert attempt.json()["userId"] == student.user["id"]
    assert attempt.json()["timeSpent"] == 42

    missing = student.client.post("/api/quiz-attempts", json={"quizId": 999, "score": 10})
    assert missing.status_code == 404

    mine = student.client.get("/api/quiz-attempts").json()
    assert [a["score"] for a in mine] == [50]

    assert educator.client.get(f"/api/quizzes/{quiz['id']}/attempts").json()[0]["answers"] == ["4", "Lyon"]
    assert other_educator.client.get(f"/api/quizzes/{quiz['id']}/attempts").status_code == 403
    assert student.client.get(f"/api/quizzes/{quiz['id']}/attempts").status_code == 403
