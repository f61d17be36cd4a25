import json

import pytest

from bookmark_manager_api.app import serverless
from bookmark_manager_api.app.core.config import settings
from bookmark_manager_api.app.serverless import dispatch, handler


BASE = "/.netlify/functions/bookmarks"


def event(method, path=BASE, body=None, query=None):
    return {
        "httpMethod": method,
        "path": path,
        "queryStringParameters": query,
        "body": json.dumps(body) if isinstance(body, (dict, list)) else body,
    }


def decode(response):
    return json.loads(response["body"]) if response["body"] else None


async def test_options_preflight(service):
    response = await dispatch(event("OPTIONS"), service)
    assert response["statusCode"] == 200
    assert response["body"] == ""
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"


async def test_health(service):
    response = await dispatch(event("GET", f"{BASE}/health"), service)
    assert decode(response) == {"success": True, "message": serverless.HEALTH_MESSAGE}


async def test_list_with_tag_and_search(service):
    body = decode(await dispatch(event("GET", query={"tag": "tools"}), service))
    assert [item["id"] for item in body["data"]] == ["seed5", "seed7"]
    assert body["count"] == 2

    body = decode(await dispatch(event("GET", query={"q": "editor"}), service))
    assert [item["id"] for item in body["data"]] == ["seed7"]


async def test_create_update_delete_cycle(service):
    response = await dispatch(
        event("POST", body={"url": "https://example.com", "title": "Example", "tags": ["demo"]}), service
    )
    assert response["statusCode"] == 201
    created = decode(response)["data"]

    response = await dispatch(
        event("PUT", f"{BASE}/{created['id']}", body={"url": "https://example.org", "title": "Changed"}),
        service,
    )
    assert response["statusCode"] == 200
    assert decode(response)["data"]["createdAt"] == created["createdAt"]

    response = await dispatch(event("DELETE", f"{BASE}/{created['id']}"), service)
    assert response["statusCode"] == 200
    response = await dispatch(event("DELETE", f"{BASE}/{created['id']}"), service)
    assert response["statusCode"] == 404
    assert decode(response) == {"success": False, "error": "Bookmark not found"}


async def test_validation_failure(service):
    response = await dispatch(event("POST", body={"url": "not-a-url", "title": "x"}), service)
    assert response["statusCode"] == 400
    assert decode(response)["details"] == [{"param": "url", "msg": "Invalid URL format"}]


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
async def test_id_required(service, method):
    response = await dispatch(event(method, body={"url": "https://example.com", "title": "x"}), service)
    assert response["statusCode"] == 400
    assert decode(response)["error"] == "Bookmark ID is required"


async def test_invalid_json_body(service):
    response = await dispatch(event("POST", body="{oops"), service)
    assert response["statusCode"] == 400
    assert decode(response)["error"] == "Invalid JSON body"


async def test_non_object_body(service):
    response = await dispatch(event("POST", body=["https://example.com"]), service)
    assert response["statusCode"] == 400
    assert decode(response)["details"][0]["param"] == "body"


async def test_unsupported_method(service):
    response = await dispatch(event("PATCH", f"{BASE}/seed1"), service)
    assert response["statusCode"] == 405


def test_handler_uses_serverless_data_file(tmp_path, monkeypatch):
    data_file = tmp_path / "serverless.json"
    monkeypatch.setattr(settings, "serverless_data_file", str(data_file))

    response = handler(event("POST", body={"url": "https://example.com", "title": "Example"}), None)
    assert response["statusCode"] == 201
    stored = json.loads(data_file.read_text(encoding="utf-8"))
    assert len(stored) == 8
    assert stored[0]["title"] == "Example"

    response = handler(event("GET"), None)
    assert decode(response)["count"] == 8
