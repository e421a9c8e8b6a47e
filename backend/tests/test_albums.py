"""API tests for the album endpoints, run against an in-memory repository."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from restapi.schemas.album import Album
from tests.mocks import MOCK_AUTH_HEADER, InMemoryAlbumRepository

NOT_FOUND_BODY = {"status": 404, "message": "The requested resource was not found."}


def _album(id: str, name: str) -> Album:
    now = datetime.now(timezone.utc)
    return Album(id=id, name=name, created_at=now, updated_at=now)


@pytest.fixture
def album_repo() -> InMemoryAlbumRepository:
    return InMemoryAlbumRepository([_album("123", "album123")])


# ── Reads ──────────────────────────────────────────────────────────────────────


class TestReadAlbums:
    def test_get_all(self, mock_client: TestClient):
        resp = mock_client.get("/albums")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_count"] == 1
        assert data["page"] == 1
        assert data["items"][0]["name"] == "album123"

    def test_get_one(self, mock_client: TestClient):
        resp = mock_client.get("/albums/123")
        assert resp.status_code == 200
        assert resp.json()["name"] == "album123"

    def test_get_unknown(self, mock_client: TestClient):
        resp = mock_client.get("/albums/1234")
        assert resp.status_code == 404
        assert resp.json() == NOT_FOUND_BODY
        assert "1234" not in resp.text

    def test_total_count_ignores_page_window(
        self, mock_client: TestClient, album_repo: InMemoryAlbumRepository
    ):
        for i in range(4):
            album_repo.create(_album(f"a{i}", f"album {i}"))
        resp = mock_client.get("/albums", params={"page": 2, "per_page": 2})
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_count"] == 5
        assert data["page_count"] == 3
        assert data["per_page"] == 2
        assert len(data["items"]) == 2

    def test_non_numeric_page_is_bad_request(self, mock_client: TestClient):
        resp = mock_client.get("/albums", params={"page": "first"})
        assert resp.status_code == 400
        assert "page" in resp.json()["details"]


# ── Create ─────────────────────────────────────────────────────────────────────


class TestCreateAlbum:
    def test_create_ok_then_count_increments(self, mock_client: TestClient):
        before = mock_client.get("/albums").json()["total_count"]
        resp = mock_client.post("/albums", json={"name": "test"}, headers=MOCK_AUTH_HEADER)
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "test"
        assert data["id"]
        assert data["created_at"] == data["updated_at"]
        assert mock_client.get("/albums").json()["total_count"] == before + 1

    def test_create_requires_auth(
        self, mock_client: TestClient, album_repo: InMemoryAlbumRepository
    ):
        resp = mock_client.post("/albums", json={"name": "test"})
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"] == "Bearer"
        assert len(album_repo) == 1

    def test_create_rejects_unknown_token(
        self, mock_client: TestClient, album_repo: InMemoryAlbumRepository
    ):
        resp = mock_client.post(
            "/albums", json={"name": "test"}, headers={"Authorization": "Bearer nope"}
        )
        assert resp.status_code == 401
        assert len(album_repo) == 1

    def test_malformed_json_without_token_is_unauthorized(
        self, mock_client: TestClient, album_repo: InMemoryAlbumRepository
    ):
        resp = mock_client.post(
            "/albums",
            content='"name":"test"}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 401
        assert resp.json()["status"] == 401
        assert len(album_repo) == 1

    def test_invalid_body_without_token_is_unauthorized(
        self, mock_client: TestClient, album_repo: InMemoryAlbumRepository
    ):
        assert mock_client.post("/albums", json={"name": ""}).status_code == 401
        assert mock_client.post("/albums").status_code == 401
        assert len(album_repo) == 1

    def test_create_malformed_json(
        self, mock_client: TestClient, album_repo: InMemoryAlbumRepository
    ):
        resp = mock_client.post(
            "/albums",
            content='"name":"test"}',
            headers={**MOCK_AUTH_HEADER, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert list(resp.json()["details"]) == ["body"]
        assert len(album_repo) == 1

    def test_create_blank_name(
        self, mock_client: TestClient, album_repo: InMemoryAlbumRepository
    ):
        resp = mock_client.post("/albums", json={"name": "  "}, headers=MOCK_AUTH_HEADER)
        assert resp.status_code == 400
        assert resp.json()["details"] == {"name": ["cannot be blank"]}
        assert len(album_repo) == 1

    def test_create_name_too_long(self, mock_client: TestClient):
        resp = mock_client.post("/albums", json={"name": "x" * 129}, headers=MOCK_AUTH_HEADER)
        assert resp.status_code == 400
        assert resp.json()["details"]["name"] == ["the length must be no more than 128"]

    def test_create_missing_name(self, mock_client: TestClient):
        resp = mock_client.post("/albums", json={}, headers=MOCK_AUTH_HEADER)
        assert resp.status_code == 400
        body = resp.json()
        assert body["status"] == 400
        assert "name" in body["details"]


# ── Update ─────────────────────────────────────────────────────────────────────


class TestUpdateAlbum:
    def test_update_ok_and_verify(self, mock_client: TestClient):
        resp = mock_client.put("/albums/123", json={"name": "albumxyz"}, headers=MOCK_AUTH_HEADER)
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "albumxyz"
        assert data["updated_at"] >= data["created_at"]
        assert mock_client.get("/albums/123").json()["name"] == "albumxyz"

    def test_update_requires_auth(self, mock_client: TestClient):
        resp = mock_client.put("/albums/123", json={"name": "albumxyz"})
        assert resp.status_code == 401
        assert mock_client.get("/albums/123").json()["name"] == "album123"

    def test_malformed_json_without_token_is_unauthorized(self, mock_client: TestClient):
        resp = mock_client.put(
            "/albums/123", content="{bad", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"] == "Bearer"
        assert mock_client.get("/albums/123").json()["name"] == "album123"

    def test_update_malformed_json(self, mock_client: TestClient):
        resp = mock_client.put(
            "/albums/123",
            content='"name":"albumxyz"}',
            headers={**MOCK_AUTH_HEADER, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert mock_client.get("/albums/123").json()["name"] == "album123"

    def test_update_unknown(self, mock_client: TestClient):
        resp = mock_client.put("/albums/nope", json={"name": "x"}, headers=MOCK_AUTH_HEADER)
        assert resp.status_code == 404
        assert resp.json() == NOT_FOUND_BODY


# ── Delete ─────────────────────────────────────────────────────────────────────


class TestDeleteAlbum:
    def test_delete_echoes_and_second_delete_is_404(self, mock_client: TestClient):
        resp = mock_client.delete("/albums/123", headers=MOCK_AUTH_HEADER)
        assert resp.status_code == 200
        assert resp.json()["name"] == "album123"

        resp = mock_client.delete("/albums/123", headers=MOCK_AUTH_HEADER)
        assert resp.status_code == 404
        assert mock_client.get("/albums/123").status_code == 404
        assert mock_client.get("/albums").json()["total_count"] == 0

    def test_delete_requires_auth(
        self, mock_client: TestClient, album_repo: InMemoryAlbumRepository
    ):
        resp = mock_client.delete("/albums/123")
        assert resp.status_code == 401
        assert len(album_repo) == 1

    def test_delete_with_basic_auth_is_rejected(self, mock_client: TestClient):
        resp = mock_client.delete("/albums/123", headers={"Authorization": "Basic dGVzdDpwYXNz"})
        assert resp.status_code == 401
