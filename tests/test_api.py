from fastapi.testclient import TestClient

from bookmark_manager_api.app.main import create_app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Bookmark Manager API is running"}


def test_list_seed_bookmarks(client):
    response = client.get("/bookmarks")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 7
    assert body["data"][0]["id"] == "seed1"
    assert set(body["data"][0]) == {"id", "url", "title", "description", "tags", "createdAt"}


def test_create_then_list(client):
    response = client.post("/bookmarks", json={"url": "https://example.com", "title": "Example"})
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Bookmark created successfully"
    created = body["data"]
    assert created["title"] == "Example"
    assert created["tags"] == []

    listing = client.get("/bookmarks").json()
    assert listing["count"] == 8
    assert listing["data"][0] == created


def test_create_validation_envelope(client):
    response = client.post("/bookmarks", json={"url": "https://example.com", "title": "", "tags": ["X"]})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"
    params = [item["param"] for item in body["details"]]
    assert "tags" in params
    assert "title" in params


def test_create_rejects_bad_url(client):
    response = client.post("/bookmarks", json={"url": "not-a-url", "title": "x"})
    assert response.status_code == 400
    assert response.json()["details"] == [{"param": "url", "msg": "Invalid URL format"}]


def test_wrongly_typed_body_is_a_validation_error(client):
    response = client.post("/bookmarks", json={"url": "https://example.com", "title": "x", "tags": "python"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"] == [{"param": "tags", "msg": "Tags must be an array"}]


def test_malformed_json_is_a_validation_error(client):
    response = client.post(
        "/bookmarks", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_tag_filter(client):
    body = client.get("/bookmarks", params={"tag": "Development"}).json()
    assert [item["id"] for item in body["data"]] == ["seed1", "seed2", "seed7"]
    assert body["count"] == 3


def test_search(client):
    body = client.get("/bookmarks/search", params={"q": "python", "tag": "reference"}).json()
    assert [item["id"] for item in body["data"]] == ["seed4"]


def test_get_update_delete(client):
    assert client.get("/bookmarks/seed5").json()["data"]["id"] == "seed5"

    response = client.put(
        "/bookmarks/seed5",
        json={"url": "https://pypi.org/", "title": "PyPI", "description": "Packages", "tags": ["python"]},
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["message"] == "Bookmark updated successfully"
    assert updated["data"]["createdAt"] == "2026-02-14T14:00:00.000Z"
    assert updated["data"]["tags"] == ["python"]

    response = client.delete("/bookmarks/seed5")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "PyPI"
    assert response.json()["message"] == "Bookmark deleted successfully"

    assert client.delete("/bookmarks/seed5").status_code == 404
    assert client.get("/bookmarks/seed5").status_code == 404


def test_update_missing_returns_404(client):
    response = client.put("/bookmarks/nope", json={"url": "https://example.com", "title": "x"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Bookmark not found"}
    assert client.get("/bookmarks").json()["count"] == 7


def test_unexpected_errors_are_generic_500(service, monkeypatch):
    async def explode(tag=None):
        raise RuntimeError("secret detail")

    monkeypatch.setattr(service, "list_bookmarks", explode)
    with TestClient(create_app(service), raise_server_exceptions=False) as client:
        response = client.get("/bookmarks")
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
