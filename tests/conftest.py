from collections import namedtuple

import pytest
from fastapi.testclient import TestClient

from learnhub.core.config import Settings
from learnhub.core.security import hash_password
from learnhub.crud.user_crud import create_user
from learnhub.main import create_app
from learnhub.models.enums import UserRole
from learnhub.schemas.user_schema import UserCreateInternal

PASSWORD = "secret123"

# A logged-in HTTP client together with the user it is logged in as
Actor = namedtuple("Actor", ["client", "user"])


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        SESSION_SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
        ADMIN_USERNAME=None,
        ADMIN_PASSWORD=None,
        ALLOW_ADMIN_SIGNUP=False,
        REFERRAL_SIGNUP_BONUS=50.0,
        REFERRAL_COMMISSION_RATE=0.10,
        PLATFORM_FEE_RATE=0.20,
        MAX_UPLOAD_SIZE_BYTES=1024,
        APP_FRONTEND_URL="http://frontend.test",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.state.database.create_all()
    yield app
    app.state.database.dispose()


@pytest.fixture
def db(app):
    session = app.state.database.session()
    yield session
    session.close()


@pytest.fixture
def new_client(app):
    """Factory for independent clients; each keeps its own session cookie."""
    clients = []

    def _new_client():
        client = TestClient(app)
        clients.append(client)
        return client

    yield _new_client
    for client in clients:
        client.close()


def register(client, username, role="student", password=PASSWORD, **extra):
    payload = {"username": username, "password": password, "role": role}
    payload.update(extra)
    response = client.post("/api/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_course(client, title="Course A", price=0.0, **extra):
    data = {"title": title, "description": f"About {title}", "videoUrl": "https://video.test/intro", "price": str(price)}
    data.update(extra)
    response = client.post("/api/courses", data=data)
    assert response.status_code == 201, response.text
    return response.json()


def enroll(client, course_id):
    response = client.post("/api/enrollments", json={"courseId": course_id})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def register_actor(new_client):
    def _register_actor(username, role="student", **extra):
        client = new_client()
        return Actor(client, register(client, username, role=role, **extra))
    return _register_actor


@pytest.fixture
def educator(register_actor):
    return register_actor("edna", role="educator")


@pytest.fixture
def other_educator(register_actor):
    return register_actor("eddie", role="educator")


@pytest.fixture
def student(register_actor):
    return register_actor("sam")


@pytest.fixture
def admin(app, new_client):
    """Admins cannot self-register; seed one in the store and log in."""
    with app.state.database.session() as session:
        create_user(session, UserCreateInternal(
            username="root", password_hash=hash_password(PASSWORD), role=UserRole.ADMIN,
        ))
    client = new_client()
    response = client.post("/api/login", json={"username": "root", "password": PASSWORD})
    assert response.status_code == 200, response.text
    return Actor(client, response.json())


@pytest.fixture
def course(educator):
    return create_course(educator.client, title="Course A")
