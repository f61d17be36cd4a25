"""Bookmark Manager API client.

This module defines a small client wrapper around the bookmark REST
API.  It uses the ``requests`` library internally and exposes the
operations a front end needs:

* :meth:`BookmarksClient.list_bookmarks` – all bookmarks, optionally by tag.
* :meth:`BookmarksClient.search_bookmarks` – text search within an optional tag.
* :meth:`BookmarksClient.create_bookmark` – add a bookmark.
* :meth:`BookmarksClient.update_bookmark` – replace a bookmark's fields.
* :meth:`BookmarksClient.delete_bookmark` – remove a bookmark.
* :meth:`BookmarksClient.health` – check that the server is up.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary
with ``status_code``, ``message`` and, for validation failures, the
per‑field ``details`` reported by the server.

Searching is done on the client: the bookmarks are listed (with the
tag filter applied by the server) and then matched locally with the
same function the server uses, so both sides agree on what matches.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from bookmark_manager_api.search import search_bookmarks


logger = logging.getLogger(__name__)

Result = Tuple[Any, Optional[Dict[str, Any]]]


class BookmarksClient:
    """Client for interacting with the bookmark manager API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3001``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level request helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/bookmarks``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(payload, error)`` where ``payload`` is the decoded
            response envelope.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            error: Dict[str, Any] = {"status_code": status, "message": str(exc)}
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    error["message"] = err_json.get("error") or error["message"]
                    if err_json.get("details"):
                        error["details"] = err_json["details"]
                except ValueError:
                    error["message"] = exc.response.text or error["message"]
            logger.error("API request failed (%s): %s", status, error["message"])
            return None, error
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Bookmark operations
    # ------------------------------------------------------------------
    def list_bookmarks(self, tag: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all bookmarks, or only those carrying ``tag``."""
        params = {"tag": tag} if tag else None
        payload, error = self._request("GET", "/bookmarks", params=params)
        if error:
            return [], error
        return (payload or {}).get("data", []), None

    def search_bookmarks(
        self, query: str, tag: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Return bookmarks whose title, URL or description contains ``query``."""
        items, error = self.list_bookmarks(tag)
        if error:
            return [], error
        return search_bookmarks(items, query), None

    def create_bookmark(
        self,
        url: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Result:
        """Create a bookmark.  Leave ``title`` empty to let the server fetch it."""
        body = _bookmark_body(url, title, description, tags)
        return self._unwrap(self._request("POST", "/bookmarks", json_body=body))

    def update_bookmark(
        self,
        bookmark_id: str,
        url: str,
        title: str,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Result:
        body = _bookmark_body(url, title, description, tags)
        return self._unwrap(self._request("PUT", f"/bookmarks/{bookmark_id}", json_body=body))

    def delete_bookmark(self, bookmark_id: str) -> Result:
        return self._unwrap(self._request("DELETE", f"/bookmarks/{bookmark_id}"))

    def health(self) -> Tuple[bool, Optional[Dict[str, Any]]]:
        payload, error = self._request("GET", "/health")
        if error:
            return False, error
        return bool((payload or {}).get("success")), None

    @staticmethod
    def _unwrap(result: Result) -> Result:
        payload, error = result
        if error:
            return None, error
        return (payload or {}).get("data"), None


def _bookmark_body(
    url: str, title: Optional[str], description: Optional[str], tags: Optional[List[str]]
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"url": url, "title": title or ""}
    if description is not None:
        body["description"] = description
    if tags is not None:
        body["tags"] = tags
    return body
