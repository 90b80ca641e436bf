"""Integration tests for the /api/projects endpoints."""

from pathlib import Path
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.portfolio.core.exceptions import StorageError
from src.portfolio.repositories import ProjectRepository
from tests.conftest import PNG_BYTES
from tests.factories import ProjectFactory

pytestmark = pytest.mark.integration

PROJECTS_URL = "/api/projects"

VALID_FORM = {
    "projectName": "Portfolio Site",
    "description": "A site.",
    "url": "https://example.com/p",
}


def png_file(name: str = "shot.png", data: bytes = PNG_BYTES) -> dict:
    return {"image": (name, data, "image/png")}


def stored_files(media_root: Path) -> list[Path]:
    directory = media_root / "projects"
    if not directory.exists():
        return []
    return sorted(directory.iterdir())


async def create_project(client, form: dict | None = None, files: dict | None = None) -> dict:
    response = await client.post(PROJECTS_URL, data=form or VALID_FORM, files=files)
    assert response.status_code == 201, response.text
    return response.json()["project"]


class TestCreateProject:
    """Tests for POST /api/projects."""

    async def test_create_without_image(self, client, media_root):
        response = await client.post(PROJECTS_URL, data=VALID_FORM)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Project uploaded successfully"
        project = data["project"]
        assert project["name"] == "Portfolio Site"
        assert project["description"] == "A site."
        assert project["url"] == "https://example.com/p"
        assert project["image"] == ""
        assert "createdAt" in project
        assert "updatedAt" in project
        assert stored_files(media_root) == []

    async def test_create_with_image_serves_file(self, client, media_root):
        project = await create_project(client, files=png_file())

        assert project["image"].startswith("/uploads/projects/")
        assert len(stored_files(media_root)) == 1

        image_response = await client.get(project["image"])
        assert image_response.status_code == 200
        assert image_response.content == PNG_BYTES

    async def test_fields_are_trimmed(self, client):
        project = await create_project(
            client,
            form={"projectName": "  Site  ", "description": " Desc ", "url": " https://a.com "},
        )

        assert project["name"] == "Site"
        assert project["url"] == "https://a.com"

    @pytest.mark.parametrize("missing", ["projectName", "description", "url"])
    async def test_missing_field_rejected(self, client, media_root, missing):
        form = {k: v for k, v in VALID_FORM.items() if k != missing}

        response = await client.post(PROJECTS_URL, data=form, files=png_file())

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Please provide project name, description, and URL."
        assert "request_id" in data
        assert stored_files(media_root) == []

    async def test_blank_name_rejected(self, client):
        response = await client.post(PROJECTS_URL, data={**VALID_FORM, "projectName": "   "})

        assert response.status_code == 400
        assert response.json()["error"] == {"name": "Project name is required"}

    async def test_invalid_url_rejected(self, client, media_root):
        response = await client.post(
            PROJECTS_URL, data={**VALID_FORM, "url": "example.com"}, files=png_file()
        )

        assert response.status_code == 400
        assert response.json()["error"] == {"url": "Please enter a valid URL"}
        assert stored_files(media_root) == []

    async def test_non_image_upload_rejected(self, client, media_root):
        response = await client.post(
            PROJECTS_URL,
            data=VALID_FORM,
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only image files are allowed (jpeg, jpg, png, webp)"
        assert stored_files(media_root) == []

    async def test_oversized_image_rejected(self, client, settings, media_root):
        too_big = b"\x00" * (settings.media_max_bytes + 1)

        response = await client.post(PROJECTS_URL, data=VALID_FORM, files=png_file(data=too_big))

        assert response.status_code == 400
        assert response.json()["message"] == "Image must be 2MB or smaller"
        assert stored_files(media_root) == []

    async def test_empty_image_rejected(self, client, media_root):
        response = await client.post(PROJECTS_URL, data=VALID_FORM, files=png_file(data=b""))

        assert response.status_code == 400
        assert response.json()["message"] == "Image file is empty"
        assert (await client.get(PROJECTS_URL)).json()["projects"] == []
        assert stored_files(media_root) == []

    async def test_too_long_name_message(self, client):
        response = await client.post(PROJECTS_URL, data={**VALID_FORM, "projectName": "n" * 101})

        assert response.status_code == 400
        assert response.json()["message"] == "Project name must be at most 100 characters"

    async def test_non_ascii_host_rejected(self, client):
        response = await client.post(
            PROJECTS_URL, data={**VALID_FORM, "url": "https://exämple.com"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Please enter a valid URL"

    async def test_storage_failure_persists_nothing(self, client, context):
        with patch.object(
            context.media_store, "store", AsyncMock(side_effect=StorageError(error="disk full"))
        ):
            response = await client.post(PROJECTS_URL, data=VALID_FORM, files=png_file())

        assert response.status_code == 500
        assert response.json()["message"] == "Image storage failed"

        listing = await client.get(PROJECTS_URL)
        assert listing.json()["projects"] == []

    async def test_database_failure_releases_uploaded_image(self, client, media_root):
        failure = OperationalError("INSERT", {}, Exception("database is locked"))

        with patch.object(ProjectRepository, "insert", AsyncMock(side_effect=failure)):
            response = await client.post(PROJECTS_URL, data=VALID_FORM, files=png_file())

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to save project"
        assert stored_files(media_root) == []


class TestReadProjects:
    """Tests for GET /api/projects and GET /api/projects/{id}."""

    async def test_list_empty(self, client):
        response = await client.get(PROJECTS_URL)

        assert response.status_code == 200
        assert response.json() == {"message": "Projects fetched successfully", "projects": []}

    async def test_list_newest_first(self, client, db_session):
        db_session.add_all(
            [
                ProjectFactory.created_ago(120, name="old"),
                ProjectFactory.created_ago(0, name="new"),
                ProjectFactory.created_ago(60, name="mid"),
            ]
        )
        await db_session.commit()

        response = await client.get(PROJECTS_URL)

        assert [p["name"] for p in response.json()["projects"]] == ["new", "mid", "old"]

    async def test_get_by_id(self, client):
        created = await create_project(client)

        response = await client.get(f"{PROJECTS_URL}/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Project fetched successfully"
        assert data["project"] == created

    @pytest.mark.parametrize("project_id", [str(uuid4()), "not-a-valid-id"])
    async def test_get_missing(self, client, project_id):
        response = await client.get(f"{PROJECTS_URL}/{project_id}")

        assert response.status_code == 404
        assert response.json()["message"] == "Project not found"


class TestUpdateProject:
    """Tests for PUT /api/projects/{id}."""

    async def test_update_without_image_keeps_reference(self, client, media_root):
        created = await create_project(client, files=png_file())

        response = await client.put(
            f"{PROJECTS_URL}/{created['id']}",
            data={"projectName": "Renamed", "description": "New", "url": "https://new.example.com"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Project updated successfully"
        assert data["project"]["name"] == "Renamed"
        assert data["project"]["image"] == created["image"]
        assert data["project"]["createdAt"] == created["createdAt"]
        assert len(stored_files(media_root)) == 1

    async def test_update_with_image_replaces_and_releases_old(self, client, media_root):
        created = await create_project(client, files=png_file())

        response = await client.put(
            f"{PROJECTS_URL}/{created['id']}", data=VALID_FORM, files=png_file("new.png")
        )

        assert response.status_code == 200
        new_image = response.json()["project"]["image"]
        assert new_image != created["image"]
        assert len(stored_files(media_root)) == 1
        assert (await client.get(created["image"])).status_code == 404
        assert (await client.get(new_image)).status_code == 200

    async def test_update_with_empty_image_rejected(self, client, media_root):
        created = await create_project(client, files=png_file())

        response = await client.put(
            f"{PROJECTS_URL}/{created['id']}", data=VALID_FORM, files=png_file(data=b"")
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Image file is empty"
        current = (await client.get(f"{PROJECTS_URL}/{created['id']}")).json()["project"]
        assert current["image"] == created["image"]
        assert len(stored_files(media_root)) == 1

    async def test_update_is_a_full_replace(self, client):
        created = await create_project(client)

        response = await client.put(
            f"{PROJECTS_URL}/{created['id']}", data={"url": "https://example.org"}
        )

        assert response.status_code == 400
        assert set(response.json()["error"]) == {"name", "description"}

    async def test_update_missing_project(self, client, media_root):
        response = await client.put(
            f"{PROJECTS_URL}/{uuid4()}", data=VALID_FORM, files=png_file()
        )

        assert response.status_code == 404
        assert stored_files(media_root) == []

    async def test_update_invalid_url(self, client):
        created = await create_project(client)

        response = await client.put(
            f"{PROJECTS_URL}/{created['id']}", data={**VALID_FORM, "url": "ftp://example.com"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == {"url": "Please enter a valid URL"}


class TestDeleteProject:
    """Tests for DELETE /api/projects/{id}."""

    async def test_delete_removes_record_and_image(self, client, media_root):
        created = await create_project(client, files=png_file())

        response = await client.delete(f"{PROJECTS_URL}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Project deleted successfully"}
        assert stored_files(media_root) == []
        assert (await client.get(f"{PROJECTS_URL}/{created['id']}")).status_code == 404

    async def test_delete_twice(self, client):
        created = await create_project(client)

        first = await client.delete(f"{PROJECTS_URL}/{created['id']}")
        second = await client.delete(f"{PROJECTS_URL}/{created['id']}")

        assert first.status_code == 200
        assert second.status_code == 404

    async def test_release_failure_does_not_fail_delete(self, client, context):
        created = await create_project(client, files=png_file())

        with patch.object(
            context.media_store, "release", AsyncMock(side_effect=StorageError(error="gone"))
        ):
            response = await client.delete(f"{PROJECTS_URL}/{created['id']}")

        assert response.status_code == 200
        assert (await client.get(f"{PROJECTS_URL}/{created['id']}")).status_code == 404


async def test_create_then_update_with_new_url_and_image(client):
    """Create without an image, then resend every field with a new URL and a file."""
    created = await create_project(client)
    assert created["image"] == ""

    response = await client.put(
        f"{PROJECTS_URL}/{created['id']}",
        data={**VALID_FORM, "url": "https://example.org"},
        files=png_file(),
    )

    assert response.status_code == 200
    project = response.json()["project"]
    assert project["id"] == created["id"]
    assert project["url"] == "https://example.org"
    assert project["name"] == created["name"]
    assert project["description"] == created["description"]
    assert project["image"] != ""
