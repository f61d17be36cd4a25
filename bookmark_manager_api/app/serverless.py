"""
Function‑per‑request adapter for serverless platforms.

``handler`` accepts a Netlify/AWS Lambda style event (``httpMethod``,
``path``, ``queryStringParameters``, ``body``) and returns a
``{"statusCode", "headers", "body"}`` dictionary.  Each invocation
loads the store from ``settings.serverless_data_file`` (the only
writable location on such platforms is the temp directory), performs
one operation and lets the store persist the result.

The envelopes are the same as those of the FastAPI application, so a
client cannot tell which transport served it.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from bookmark_manager_api.app.core.config import settings
from bookmark_manager_api.app.core.errors import NotFoundError, ValidationError, details_from_pydantic
from bookmark_manager_api.app.core.logging_config import setup_logging
from bookmark_manager_api.app.schemas.bookmark import BookmarkIn
from bookmark_manager_api.app.services.bookmark_service import BookmarkService


logger = logging.getLogger(__name__)

HEALTH_MESSAGE = "Bookmark Manager API is running (serverless)"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Content-Type": "application/json",
}


def _response(status_code: int, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(payload) if payload is not None else "",
    }


def _error(status_code: int, message: str, details: Optional[List[Dict[str, str]]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        payload["details"] = details
    return _response(status_code, payload)


def _bookmark_id_from_path(path: str) -> Optional[str]:
    """Return the segment following ``bookmarks`` in ``path``, if any.

    ``/.netlify/functions/bookmarks/abc`` and ``/api/bookmarks/abc``
    both yield ``abc``.
    """
    parts = [part for part in path.split("/") if part]
    if "bookmarks" in parts:
        index = parts.index("bookmarks")
        if index + 1 < len(parts):
            return parts[index + 1]
    return None


def _parse_body(body: Optional[str]) -> BookmarkIn:
    """Decode a JSON request body into ``BookmarkIn``.

    Raises ``ValueError`` for undecodable JSON and ``ValidationError``
    for a body of the wrong shape.
    """
    data = json.loads(body or "{}")
    if not isinstance(data, dict):
        raise ValidationError([{"param": "body", "msg": "Request body must be a JSON object"}])
    try:
        return BookmarkIn.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(details_from_pydantic(exc.errors())) from exc


async def dispatch(event: Dict[str, Any], service: Optional[BookmarkService] = None) -> Dict[str, Any]:
    """Serve one event against ``service`` (a fresh store by default)."""
    method = (event.get("httpMethod") or "GET").upper()
    path = event.get("path") or ""
    if method == "OPTIONS":
        return _response(200)

    try:
        if method == "GET" and path.rstrip("/").endswith("/health"):
            return _response(200, {"success": True, "message": HEALTH_MESSAGE})

        if service is None:
            service = BookmarkService(settings.serverless_data_file)
        bookmark_id = _bookmark_id_from_path(path)
        query = event.get("queryStringParameters") or {}

        if method == "GET":
            if bookmark_id:
                bookmark = await service.get_bookmark(bookmark_id)
                return _response(200, {"success": True, "data": bookmark.to_dict()})
            if query.get("q"):
                bookmarks = await service.search(query["q"], query.get("tag"))
            else:
                bookmarks = await service.list_bookmarks(query.get("tag"))
            return _response(
                200,
                {"success": True, "data": [b.to_dict() for b in bookmarks], "count": len(bookmarks)},
            )

        if method == "POST":
            bookmark = await service.create_bookmark(_parse_body(event.get("body")))
            return _response(
                201,
                {"success": True, "data": bookmark.to_dict(), "message": "Bookmark created successfully"},
            )

        if method in {"PUT", "DELETE"} and not bookmark_id:
            return _error(400, "Bookmark ID is required")

        if method == "PUT":
            bookmark = await service.update_bookmark(bookmark_id, _parse_body(event.get("body")))
            return _response(
                200,
                {"success": True, "data": bookmark.to_dict(), "message": "Bookmark updated successfully"},
            )

        if method == "DELETE":
            bookmark = await service.delete_bookmark(bookmark_id)
            return _response(
                200,
                {"success": True, "data": bookmark.to_dict(), "message": "Bookmark deleted successfully"},
            )

        return _error(405, "Method not allowed")
    except ValidationError as exc:
        return _error(400, "Validation failed", exc.details)
    except NotFoundError:
        return _error(404, "Bookmark not found")
    except json.JSONDecodeError:
        return _error(400, "Invalid JSON body")
    except Exception:
        logger.exception("Function error on %s %s", method, path)
        return _error(500, "Internal server error")


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Platform entry point."""
    setup_logging(settings.log_level)
    return asyncio.run(dispatch(event))
