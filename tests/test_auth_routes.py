from learnhub.core.config import Settings
from learnhub.main import create_app

from fastapi.testclient import TestClient

from conftest import PASSWORD, register


def test_register_logs_the_user_in(new_client):
    client = new_client()
    user = register(client, "alice", email="alice@example.com")
    assert user["username"] == "alice"
    assert user["role"] == "student"
    assert user["email"] == "alice@example.com"
    assert user["earnings"] == 0.0
    assert user["referralCode"].startswith(f"REF{user['id']}")
    assert "passwordHash" not in user

    response = client.get("/api/user")
    assert response.status_code == 200
    assert response.json()["id"] == user["id"]


def test_register_duplicate_username(new_client):
    register(new_client(), "alice")
    response = new_client().post("/api/register", json={"username": "alice", "password": PASSWORD})
    assert response.status_code == 400
    assert response.json()["message"] == "Username already exists"


def test_register_validation_errors_are_400(new_client):
    response = new_client().post("/api/register", json={"username": "al", "password": "x"})
    assert response.status_code == 400
    body = response.json()
    assert body["reason"] == "validation"
    assert "username" in body["message"]


def test_register_as_admin_is_forbidden_by_default(new_client):
    response = new_client().post("/api/register", json={"username": "mallory", "password": PASSWORD, "role": "admin"})
    assert response.status_code == 403
    assert response.json()["reason"] == "forbidden_role"


def test_register_with_unknown_referral_code(new_client):
    response = new_client().post(
        "/api/register", json={"username": "bob", "password": PASSWORD, "referralCode": "REF999zzzzz"}
    )
    assert response.status_code == 400


def test_referral_signup_credits_the_referrer(register_actor, new_client):
    referrer = register_actor("alice")
    newcomer = register(new_client(), "bob", referralCode=referrer.user["referralCode"])
    assert newcomer["referredBy"] == referrer.user["referralCode"]

    me = referrer.client.get("/api/user").json()
    assert me["earnings"] == 50.0
    ledger = referrer.client.get("/api/earnings").json()
    assert len(ledger) == 1
    assert ledger[0]["source"] == "referral_signup"
    assert ledger[0]["relatedUserId"] == newcomer["id"]


def test_login_and_logout(new_client):
    register(new_client(), "alice")
    client = new_client()
    assert client.get("/api/user").status_code == 401

    bad = client.post("/api/login", json={"username": "alice", "password": "wrong-password"})
    assert bad.status_code == 401
    assert bad.json()["reason"] == "unauthenticated"

    good = client.post("/api/login", json={"username": "alice", "password": PASSWORD})
    assert good.status_code == 200
    assert client.get("/api/user").json()["username"] == "alice"

    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/user").status_code == 401


def test_login_unknown_user(new_client):
    response = new_client().post("/api/login", json={"username": "ghost", "password": PASSWORD})
    assert response.status_code == 401


def test_protected_routes_require_a_session(new_client):
    client = new_client()
    for path in ("/api/courses", "/api/enrollments", "/api/notifications", "/api/referrals/me", "/api/admin/stats"):
        response = client.get(path)
        assert response.status_code == 401, path
        assert response.json() == {"message": "Unauthorized", "reason": "unauthenticated"}


def test_admin_is_seeded_on_startup(tmp_path):
    settings = Settings(
        DATABASE_URL="sqlite://",
        UPLOAD_DIR=str(tmp_path),
        ADMIN_USERNAME="boss",
        ADMIN_PASSWORD=PASSWORD,
        LOG_LEVEL="WARNING",
    )
    app = create_app(settings)
    with TestClient(app) as client: # Runs the startup event
        response = client.post("/api/login", json={"username": "boss", "password": PASSWORD})
        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        assert client.get("/api/admin/stats").status_code == 200


def test_framework_errors_use_the_message_body(new_client, student):
    unknown = new_client().get("/api/no-such-route")
    assert unknown.status_code == 404
    assert unknown.json() == {"message": "Not Found"}

    wrong_method = student.client.delete("/api/courses")
    assert wrong_method.status_code == 405
    assert wrong_method.json() == {"message": "Method Not Allowed"}


def test_api_prefix_is_configurable(settings):
    settings.API_PREFIX = "/v1"
    app = create_app(settings)
    app.state.database.create_all()
    client = TestClient(app)

    response = client.post("/v1/register", json={"username": "val", "password": PASSWORD, "role": "student"})
    assert response.status_code == 201, response.text
    assert client.get("/v1/user").json()["username"] == "val"
    assert client.get("/api/user").status_code == 404
    app.state.database.dispose()
