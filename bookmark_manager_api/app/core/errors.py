"""
Exception taxonomy of the bookmark manager.

Validation and not‑found errors are surfaced to API callers with
structured detail.  Fetch and persistence errors are raised inside
their own modules and handled at the store boundary; they never reach
a caller.
"""

from typing import Any, Dict, List, Optional


class BookmarkError(Exception):
    """Base class for all bookmark manager errors."""


class BookmarkValidationError(BookmarkError):
    """Client input violates one or more field rules.

    ``details`` holds one ``{"param": <field>, "msg": <message>}`` entry
    per violated rule, in field order.
    """

    def __init__(self, details: List[Dict[str, str]]) -> None:
        super().__init__("Validation failed")
        self.details = details

    @property
    def fields(self) -> List[str]:
        return [item["param"] for item in self.details]


class BookmarkNotFoundError(BookmarkError):
    """No bookmark with the requested id exists."""

    def __init__(self, bookmark_id: str) -> None:
        super().__init__(f"Bookmark {bookmark_id} not found")
        self.bookmark_id = bookmark_id


class TransientFetchError(BookmarkError):
    """Title enrichment could not obtain a page title."""


class PersistenceError(BookmarkError):
    """The backing file could not be read or written."""


# Short names used throughout the service layer and the tests.
ValidationError = BookmarkValidationError
NotFoundError = BookmarkNotFoundError


def details_from_pydantic(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Convert Pydantic/FastAPI error entries to ``{param, msg}`` details.

    Errors on the request body are reported against the top‑level field
    they belong to (``url`` for ``("body", "url")``).  An error on
    the body as a whole (e.g. malformed JSON) is reported as ``body``.
    """
    details: List[Dict[str, str]] = []
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part != "body"]
        param: Optional[str] = None
        for part in loc:
            if isinstance(part, str):
                param = part
                break
        msg = _PYDANTIC_MESSAGES.get(param or "", error.get("msg", "Invalid value"))
        details.append({"param": param or "body", "msg": msg})
    return details


_PYDANTIC_MESSAGES = {
    "url": "Invalid URL format",
    "title": "Title must be a string",
    "description": "Description must be a string",
    "tags": "Tags must be an array",
}
