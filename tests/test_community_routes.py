from conftest import enroll


def make_assignment(educator, course, **overrides):
    payload = {"title": "Essay", "description": "Write 500 words", "maxScore": 10}
    payload.update(overrides)
    response = educator.client.post(f"/api/courses/{course['id']}/assignments", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


# --- Assignments & submissions ---

def test_assignment_lifecycle(educator, student, course):
    assignment = make_assignment(educator, course)
    enroll(student.client, course["id"])

    listed = student.client.get(f"/api/courses/{course['id']}/assignments").json()
    assert [a["id"] for a in listed] == [assignment["id"]]

    submitted = student.client.post(
        f"/api/assignments/{assignment['id']}/submissions", data={"content": "My essay"}
    )
    assert submitted.status_code == 201, submitted.text
    submission = submitted.json()
    assert submission["status"] == "submitted"
    assert submission["grade"] is None

    queue = educator.client.get(f"/api/assignments/{assignment['id']}/submissions").json()
    assert [s["id"] for s in queue] == [submission["id"]]

    graded = educator.client.patch(
        f"/api/submissions/{submission['id']}/grade", json={"grade": 8, "feedback": "Solid work"}
    )
    assert graded.status_code == 200
    assert graded.json()["status"] == "graded"
    assert graded.json()["feedback"] == "Solid work"

    notifications = student.client.get("/api/notifications").json()
    assert notifications[0]["type"] == "grade"
    assert "8/10" in notifications[0]["message"]

    mine = student.client.get("/api/submissions").json()
    assert [s["grade"] for s in mine] == [8]


def test_submission_with_file(educator, student, course):
    assignment = make_assignment(educator, course)
    enroll(student.client, course["id"])
    response = student.client.post(
        f"/api/assignments/{assignment['id']}/submissions",
        files={"file": ("answer.txt", b"42", "text/plain")},
    )
    assert response.status_code == 201, response.text
    assert response.json()["fileUrl"].startswith("/uploads/")
    assert response.json()["content"] is None


def test_empty_submission_is_rejected(educator, student, course):
    assignment = make_assignment(educator, course)
    enroll(student.client, course["id"])
    response = student.client.post(f"/api/assignments/{assignment['id']}/submissions", data={})
    assert response.status_code == 400


def test_submission_requires_enrollment(educator, student, course):
    assignment = make_assignment(educator, course)
    response = student.client.post(f"/api/assignments/{assignment['id']}/submissions", data={"content": "hi"})
    assert response.status_code == 403
    assert student.client.post("/api/assignments/999/submissions", data={"content": "hi"}).status_code == 404


def test_assignment_ownership(educator, other_educator, student, admin, course):
    forbidden = other_educator.client.post(f"/api/courses/{course['id']}/assignments", json={"title": "X"})
    assert forbidden.status_code == 403

    assignment = make_assignment(educator, course)
    enroll(student.client, course["id"])
    submission = student.client.post(
        f"/api/assignments/{assignment['id']}/submissions", data={"content": "work"}
    ).json()

    assert other_educator.client.get(f"/api/assignments/{assignment['id']}/submissions").status_code == 403
    assert student.client.get(f"/api/assignments/{assignment['id']}/submissions").status_code == 403
    grade_path = f"/api/submissions/{submission['id']}/grade"
    assert other_educator.client.patch(grade_path, json={"grade": 5}).status_code == 403
    assert student.client.patch(grade_path, json={"grade": 10}).status_code == 403

    assert admin.client.patch(grade_path, json={"grade": 5}).status_code == 200


def test_grade_above_max_score(educator, student, course):
    assignment = make_assignment(educator, course, maxScore=10)
    enroll(student.client, course["id"])
    submission = student.client.post(
        f"/api/assignments/{assignment['id']}/submissions", data={"content": "work"}
    ).json()

    response = educator.client.patch(f"/api/submissions/{submission['id']}/grade", json={"grade": 11})
    assert response.status_code == 400
    assert educator.client.patch("/api/submissions/999/grade", json={"grade": 1}).status_code == 404


# --- Discussions ---

def test_discussion_and_reply_notify_the_author(educator, student, course):
    enroll(student.client, course["id"])
    created = student.client.post(
        f"/api/courses/{course['id']}/discussions", json={"title": "Question", "content": "How do I start?"}
    )
    assert created.status_code == 201, created.text
    discussion = created.json()
    assert discussion["userId"] == student.user["id"]

    reply = educator.client.post(f"/api/discussions/{discussion['id']}/replies", json={"content": "Watch the intro."})
    assert reply.status_code == 201

    # Replying to your own thread does not notify
    student.client.post(f"/api/discussions/{discussion['id']}/replies", json={"content": "Thanks!"})

    replies = student.client.get(f"/api/discussions/{discussion['id']}/replies").json()
    assert [r["content"] for r in replies] == ["Watch the intro.", "Thanks!"]

    reply_notes = [n for n in student.client.get("/api/notifications").json() if n["type"] == "reply"]
    assert len(reply_notes) == 1
    assert "edna" in reply_notes[0]["message"]


def test_discussions_require_course_access(educator, student, other_educator, course):
    path = f"/api/courses/{course['id']}/discussions"
    assert student.client.get(path).status_code == 403
    assert other_educator.client.post(path, json={"title": "Hi", "content": "x"}).status_code == 403

    discussion = educator.client.post(path, json={"title": "Welcome", "content": "Say hi"}).json()
    assert student.client.post(
        f"/api/discussions/{discussion['id']}/replies", json={"content": "hi"}
    ).status_code == 403
    assert student.client.get(f"/api/discussions/{discussion['id']}/replies").status_code == 403
    assert student.client.get("/api/discussions/999/replies").status_code == 404

    enroll(student.client, course["id"])
    newest_first = educator.client.post(path, json={"title": "Week 2", "content": "..."}).json()
    assert [d["id"] for d in student.client.get(path).json()] == [newest_first["id"], discussion["id"]]


# --- Notifications ---

def test_mark_notification_read(educator, student, admin, course):
    enroll(student.client, course["id"])
    [notification] = educator.client.get("/api/notifications").json()
    assert notification["read"] is False

    assert student.client.patch(f"/api/notifications/{notification['id']}/read").status_code == 403
    forbidden = admin.client.patch(f"/api/notifications/{notification['id']}/read")
    assert forbidden.status_code == 403
    assert forbidden.json()["reason"] == "forbidden_ownership"

    marked = educator.client.patch(f"/api/notifications/{notification['id']}/read")
    assert marked.status_code == 200
    assert marked.json()["read"] is True
    assert educator.client.get("/api/notifications", params={"unreadOnly": "true"}).json() == []
    assert len(educator.client.get("/api/notifications").json()) == 1

    assert educator.client.patch("/api/notifications/999/read").status_code == 404
