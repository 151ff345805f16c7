import pytest

from learnhub.core.errors import NotFoundError
from learnhub.services import storage_service


def upload_material(educator, course, content=b"hello"):
    response = educator.client.post(
        f"/api/courses/{course['id']}/materials",
        data={"title": "File"},
        files={"file": ("hello.txt", content, "text/plain")},
    )
    assert response.status_code == 201, response.text
    return response.json()["fileUrl"]


def test_uploaded_files_are_served_to_authenticated_users(educator, student, new_client, course):
    url = upload_material(educator, course)
    assert student.client.get(url).content == b"hello"
    assert new_client().get(url).status_code == 401


def test_unknown_upload_is_404(student):
    response = student.client.get("/uploads/does-not-exist.txt")
    assert response.status_code == 404


def test_uploads_get_unique_names(educator, course):
    assert upload_material(educator, course) != upload_material(educator, course)


def test_resolve_upload_path_stays_inside_upload_dir(settings, tmp_path):
    (tmp_path / "secret.txt").write_text("top secret")
    with pytest.raises(NotFoundError):
        storage_service.resolve_upload_path("../secret.txt", settings)
