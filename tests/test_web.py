"""Tests for the HTTP API."""

from unittest.mock import patch

import pytest

from notepad.models import DEFAULT_FOLDER
from notepad.settings import Settings
from notepad.state import ApplicationState
from notepad.stores import MemoryStore
from notepad.web import create_app


class TestLogin:
    """Test cases for POST /api/login."""

    def test_success(self, client):
        """Test that the configured pair logs in."""
        response = client.post("/api/login", json={"username": "admin", "password": "s3cret"})
        assert response.status_code == 200
        assert response.get_json() == {"success": True}

    @pytest.mark.parametrize(
        "body",
        [
            {"username": "admin", "password": "nope"},
            {"username": "nope", "password": "s3cret"},
        ],
    )
    def test_failure_is_generic(self, client, body):
        """Test that bad credentials give the same 401 whichever field is wrong."""
        response = client.post("/api/login", json=body)
        assert response.status_code == 401
        assert response.get_json() == {"message": "Invalid credentials"}

    def test_malformed_body(self, client):
        """Test that a missing field is a validation error."""
        response = client.post("/api/login", json={"username": "admin"})
        assert response.status_code == 400
        assert response.get_json()["field"] == "password"


class TestNotesApi:
    """Test cases for /api/notes."""

    def test_list_empty(self, client):
        """Test listing an empty notebook."""
        response = client.get("/api/notes")
        assert response.status_code == 200
        assert response.get_json() == []

    def test_create(self, client):
        """Test creating a note."""
        response = client.post("/api/notes", json={"title": "A", "content": "B"})

        assert response.status_code == 201
        note = response.get_json()
        assert note["id"] == 1
        assert note["folder"] == DEFAULT_FOLDER
        assert note["attachments"] == []
        assert "createdAt" in note
        assert client.get("/api/notes").get_json() == [note]

    def test_create_with_attachment(self, client):
        """Test that attachments are stored inline."""
        attachment = {"name": "a.txt", "url": "data:text/plain;base64,YQ==", "type": "text/plain"}
        response = client.post(
            "/api/notes",
            json={"title": "A", "content": "B", "folder": "Work", "attachments": [attachment]},
        )

        assert response.status_code == 201
        assert response.get_json()["attachments"] == [attachment]

    def test_create_validation_error(self, client):
        """Test that an empty title is rejected with field information."""
        response = client.post("/api/notes", json={"title": "", "content": "B"})

        assert response.status_code == 400
        assert response.get_json() == {"message": "Title is required", "field": "title"}
        assert client.get("/api/notes").get_json() == []

    def test_create_without_json(self, client):
        """Test that a non-JSON body is rejected."""
        response = client.post("/api/notes", data="title=A", content_type="text/plain")
        assert response.status_code == 400

    def test_folder_filter(self, client):
        """Test filtering by folder, including the folderId alias."""
        client.post("/api/notes", json={"title": "A", "content": "B"})
        client.post("/api/notes", json={"title": "C", "content": "D", "folder": "Work"})

        by_folder = client.get("/api/notes", query_string={"folder": "Work"}).get_json()
        by_alias = client.get("/api/notes", query_string={"folderId": "Work"}).get_json()

        assert [n["title"] for n in by_folder] == ["C"]
        assert by_alias == by_folder

    def test_delete(self, client):
        """Test deleting a note."""
        client.post("/api/notes", json={"title": "A", "content": "B"})

        response = client.delete("/api/notes/1")

        assert response.status_code == 204
        assert response.data == b""
        assert client.get("/api/notes").get_json() == []

    def test_delete_missing_is_noop(self, client):
        """Test that deleting an unknown id still succeeds."""
        assert client.delete("/api/notes/42").status_code == 204

    def test_get(self, client):
        """Test fetching one note by id."""
        created = client.post("/api/notes", json={"title": "A", "content": "B"}).get_json()

        response = client.get(f"/api/notes/{created['id']}")

        assert response.status_code == 200
        assert response.get_json() == created

    def test_get_missing(self, client):
        """Test that an unknown id is a 404 with a message."""
        response = client.get("/api/notes/42")

        assert response.status_code == 404
        assert response.get_json() == {"message": 'Note with ID "42" does not exist'}

    def test_get_invalid_id(self, client):
        """Test that a non-integer id is rejected on lookup too."""
        response = client.get("/api/notes/abc")
        assert response.status_code == 400
        assert response.get_json() == {"message": "Invalid ID"}

    def test_deleted_id_not_reused(self, client):
        """Test that a new note never takes the id of a deleted one."""
        client.post("/api/notes", json={"title": "A", "content": "B"})
        second = client.post("/api/notes", json={"title": "C", "content": "D"}).get_json()
        client.delete(f"/api/notes/{second['id']}")

        third = client.post("/api/notes", json={"title": "E", "content": "F"}).get_json()

        assert third["id"] == second["id"] + 1
        assert client.get(f"/api/notes/{second['id']}").status_code == 404

    def test_delete_invalid_id(self, client):
        """Test that a non-integer id is rejected."""
        response = client.delete("/api/notes/abc")
        assert response.status_code == 400
        assert response.get_json() == {"message": "Invalid ID"}


class TestFoldersApi:
    """Test cases for /api/folders."""

    def test_list_includes_default(self, client):
        """Test that the default folder is always listed."""
        assert client.get("/api/folders").get_json() == [{"name": DEFAULT_FOLDER}]

    def test_create(self, client):
        """Test creating a folder."""
        response = client.post("/api/folders", json={"name": " Work "})

        assert response.status_code == 201
        assert response.get_json() == {"name": "Work"}
        assert {"name": "Work"} in client.get("/api/folders").get_json()

    def test_create_validation_error(self, client):
        """Test that an empty folder name is rejected."""
        response = client.post("/api/folders", json={"name": ""})
        assert response.status_code == 400
        assert response.get_json()["field"] == "name"

    def test_delete_cascades(self, client):
        """Test that deleting a folder deletes its notes."""
        client.post("/api/notes", json={"title": "A", "content": "B", "folder": "Work"})

        response = client.delete("/api/folders/Work")

        assert response.status_code == 204
        assert client.get("/api/notes").get_json() == []
        assert client.get("/api/folders").get_json() == [{"name": DEFAULT_FOLDER}]

    def test_delete_default_refused(self, client):
        """Test that the default folder cannot be deleted."""
        client.post("/api/notes", json={"title": "A", "content": "B"})

        response = client.delete(f"/api/folders/{DEFAULT_FOLDER}")

        assert response.status_code == 400
        assert "cannot be deleted" in response.get_json()["message"]
        assert len(client.get("/api/notes").get_json()) == 1

    def test_delete_name_with_space(self, client):
        """Test that URL-encoded folder names are decoded."""
        client.post("/api/folders", json={"name": "Side projects"})
        assert client.delete("/api/folders/Side%20projects").status_code == 204
        assert {"name": "Side projects"} not in client.get("/api/folders").get_json()


class TestApplication:
    """Test cases for the application factory and error handling."""

    def test_unknown_route_is_json(self, client):
        """Test that HTTP errors are reported as JSON."""
        response = client.get("/api/nothing")
        assert response.status_code == 404
        assert "message" in response.get_json()

    def test_unexpected_error_is_opaque(self, client):
        """Test that unexpected exceptions become a generic 500."""
        with patch(
            "notepad.repositories.notes.NoteRepository.list",
            side_effect=RuntimeError("boom"),
        ):
            response = client.get("/api/notes")

        assert response.status_code == 500
        assert response.get_json() == {"message": "Internal server error"}

    def test_seeded_notebook(self, tmp_path):
        """Test that the welcome notes appear when seeding is on."""
        ApplicationState().reset()
        app = create_app(
            Settings(data_dir=tmp_path, seed_welcome_notes=True), store=MemoryStore()
        )
        try:
            notes = app.test_client().get("/api/notes").get_json()
            assert notes
            assert all(n["folder"] == DEFAULT_FOLDER for n in notes)
        finally:
            ApplicationState().close()
            ApplicationState._instance = None

    def test_simulated_latency(self, settings):
        """Test that mutating requests wait for the configured delay."""
        ApplicationState().reset()
        settings.simulated_latency = 0.25
        app = create_app(settings, store=MemoryStore())
        try:
            client = app.test_client()
            with patch("notepad.web.time.sleep") as sleep:
                client.get("/api/notes")
                sleep.assert_not_called()
                client.post("/api/folders", json={"name": "Work"})
                sleep.assert_called_once_with(0.25)
        finally:
            ApplicationState().close()
            ApplicationState._instance = None
