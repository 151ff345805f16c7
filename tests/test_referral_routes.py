import pytest

from conftest import create_course, enroll, register


@pytest.fixture
def earner(register_actor, new_client):
    """A user holding a 100.00 balance from two referral sign-ups."""
    actor = register_actor("rita")
    register(new_client(), "bob", referralCode=actor.user["referralCode"])
    register(new_client(), "cat", referralCode=actor.user["referralCode"])
    return actor


def test_referral_info(earner):
    info = earner.client.get("/api/referrals/me").json()
    code = earner.user["referralCode"]
    assert info == {
        "referralCode": code,
        "referralLink": f"http://frontend.test/register?ref={code}",
        "referredCount": 2,
        "earnings": 100.0,
    }


def test_payout_request_over_earnings(earner):
    response = earner.client.post("/api/payouts/request", json={"amount": 100.01})
    assert response.status_code == 400
    assert response.json()["reason"] == "validation_conflict"
    assert earner.client.get("/api/payouts").json() == []


@pytest.mark.parametrize("amount", [0, -10])
def test_payout_amount_must_be_positive(earner, amount):
    response = earner.client.post("/api/payouts/request", json={"amount": amount})
    assert response.status_code == 400
    assert response.json()["reason"] == "validation"


def test_paid_payout_flow(earner, admin):
    requested = earner.client.post("/api/payouts/request", json={"amount": 30, "paymentMethod": "upi"})
    assert requested.status_code == 201
    payout = requested.json()
    assert payout["status"] == "pending"
    assert payout["paymentMethod"] == "upi"

    pending = admin.client.get("/api/admin/payouts", params={"status": "pending"}).json()
    assert [p["id"] for p in pending] == [payout["id"]]

    processed = admin.client.patch(
        f"/api/admin/payouts/{payout['id']}/process", json={"status": "paid", "transactionId": "tx-77"}
    )
    assert processed.status_code == 200
    assert processed.json()["status"] == "paid"
    assert processed.json()["transactionId"] == "tx-77"
    assert processed.json()["processedById"] == admin.user["id"]

    assert earner.client.get("/api/user").json()["earnings"] == pytest.approx(70.0)
    notes = earner.client.get("/api/notifications", params={"unreadOnly": "true"}).json()
    assert notes[0]["type"] == "payout"

    again = admin.client.patch(f"/api/admin/payouts/{payout['id']}/process", json={"status": "failed"})
    assert again.status_code == 400
    assert earner.client.get("/api/user").json()["earnings"] == pytest.approx(70.0)


def test_failed_payout_keeps_earnings(earner, admin):
    payout = earner.client.post("/api/payouts/request", json={"amount": 30}).json()
    processed = admin.client.patch(f"/api/admin/payouts/{payout['id']}/process", json={"status": "failed"})
    assert processed.status_code == 200
    assert earner.client.get("/api/user").json()["earnings"] == 100.0
    assert [p["status"] for p in earner.client.get("/api/payouts").json()] == ["failed"]


def test_process_payout_validation(earner, admin):
    payout = earner.client.post("/api/payouts/request", json={"amount": 30}).json()
    path = f"/api/admin/payouts/{payout['id']}/process"
    assert admin.client.patch(path, json={"status": "pending"}).status_code == 400
    assert admin.client.patch("/api/admin/payouts/999/process", json={"status": "paid"}).status_code == 404


def test_payout_administration_is_admin_only(earner, educator):
    payout = earner.client.post("/api/payouts/request", json={"amount": 30}).json()
    for actor in (earner, educator):
        response = actor.client.patch(f"/api/admin/payouts/{payout['id']}/process", json={"status": "paid"})
        assert response.status_code == 403
        assert response.json()["reason"] == "forbidden_role"
        assert actor.client.get("/api/admin/payouts").status_code == 403


def test_admin_users_and_stats(admin, educator, student):
    course = create_course(educator.client, title="Premium", price=50)
    enroll(student.client, course["id"])

    users = admin.client.get("/api/admin/users").json()
    assert users["total"] == 3
    assert {u["username"] for u in users["users"]} == {"root", "edna", "sam"}

    educators = admin.client.get("/api/admin/users", params={"role": "educator"}).json()
    assert [u["username"] for u in educators["users"]] == ["edna"]
    assert educators["total"] == 1

    stats = admin.client.get("/api/admin/stats").json()
    assert stats["totalUsers"] == 3
    assert stats["totalStudents"] == 1
    assert stats["totalEducators"] == 1
    assert stats["totalCourses"] == 1
    assert stats["totalEnrollments"] == 1
    assert stats["completedEnrollments"] == 0
    assert stats["pendingPayouts"] == 0
    assert stats["totalEarningsCredited"] == pytest.approx(40.0)

    assert student.client.get("/api/admin/users").status_code == 403
