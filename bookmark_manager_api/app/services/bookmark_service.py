"""
Service layer for bookmarks.

``BookmarkService`` owns the in‑memory collection of bookmarks and its
backing JSON file.  It provides list, get, create, update, delete and
search operations, validates and normalizes client input, fills in a
missing title from the target page on create, and rewrites the backing
file after every successful mutation.

The collection is ordered newest first.  Mutations run under an
``asyncio.Lock`` so that interleaved requests on the event loop always
see a consistent collection; the title fetch happens before the lock
is taken.

Validation collects every violated rule before failing, so clients can
show all problems at once:

* ``url`` is required and must be an absolute http(s) URL;
* ``title`` is required (after enrichment) and at most 200 characters;
* ``description`` is at most 500 characters;
* ``tags`` is a list of at most 5 lowercase strings.

Mixed‑case tags are rejected rather than silently lowered.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import ValidationError as PydanticValidationError

from bookmark_manager_api.app.core.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from bookmark_manager_api.app.core.storage import (
    SEED_BOOKMARKS,
    get_data_path,
    read_bookmarks,
    write_bookmarks,
)
from bookmark_manager_api.app.schemas.bookmark import Bookmark, BookmarkIn
from bookmark_manager_api.app.services.title_service import fetch_page_title
from bookmark_manager_api.search import filter_by_tag, search_bookmarks


logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 500
MAX_TAGS = 5

_ID_ALPHABET = string.digits + string.ascii_lowercase

TitleFetcher = Callable[[str], Awaitable[Optional[str]]]


def is_valid_url(value: str) -> bool:
    """Return ``True`` if ``value`` is an absolute http or https URL."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_bookmark_input(data: BookmarkIn) -> List[Dict[str, str]]:
    """Check ``data`` against the field rules.

    Returns a list of ``{"param", "msg"}`` entries, empty when the input
    is valid.  String values are checked after trimming.
    """
    errors: List[Dict[str, str]] = []

    url = (data.url or "").strip()
    if not url:
        errors.append({"param": "url", "msg": "URL is required"})
    elif not is_valid_url(url):
        errors.append({"param": "url", "msg": "Invalid URL format"})

    title = (data.title or "").strip()
    if not title:
        errors.append({"param": "title", "msg": "Title is required"})
    elif len(title) > MAX_TITLE_LENGTH:
        errors.append({"param": "title", "msg": f"Title must be {MAX_TITLE_LENGTH} characters or less"})

    description = (data.description or "").strip()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        errors.append(
            {"param": "description", "msg": f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less"}
        )

    tags = data.tags or []
    if len(tags) > MAX_TAGS:
        errors.append({"param": "tags", "msg": f"Maximum {MAX_TAGS} tags allowed"})
    if any(not isinstance(tag, str) or tag != tag.lower() for tag in tags):
        errors.append({"param": "tags", "msg": "Tags must be lowercase strings"})

    return errors


def generate_id() -> str:
    """Return a millisecond timestamp followed by 9 random base‑36 characters."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}{suffix}"


def utc_timestamp() -> str:
    """Current UTC time as ISO‑8601 with milliseconds, e.g. ``2026-02-14T10:00:00.000Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BookmarkService:
    """Owner of the bookmark collection and its backing file."""

    def __init__(
        self,
        data_file: Optional[str] = None,
        *,
        title_fetcher: Optional[TitleFetcher] = None,
    ) -> None:
        self.path: Path = get_data_path(data_file)
        self._title_fetcher: TitleFetcher = title_fetcher or fetch_page_title
        self._lock = asyncio.Lock()
        self._bookmarks: List[Bookmark] = self._load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _load(self) -> List[Bookmark]:
        """Load the collection, seeding the backing file if it does not exist.

        An unreadable or malformed file is left untouched and the seed
        data is used for this process instead.
        """
        if not self.path.exists():
            logger.info("No bookmark file at %s, seeding %d bookmarks", self.path, len(SEED_BOOKMARKS))
            bookmarks = self._seed()
            self._persist(bookmarks)
            return bookmarks
        try:
            bookmarks = [Bookmark.model_validate(item) for item in read_bookmarks(self.path)]
        except (PersistenceError, PydanticValidationError) as exc:
            logger.error("Error loading bookmarks from %s, falling back to seed data: %s", self.path, exc)
            return self._seed()
        logger.info("Loaded %d bookmarks from %s", len(bookmarks), self.path)
        return bookmarks

    @staticmethod
    def _seed() -> List[Bookmark]:
        return [Bookmark.model_validate(item) for item in SEED_BOOKMARKS]

    def _persist(self, bookmarks: Optional[List[Bookmark]] = None) -> None:
        """Write the collection to disk; failures are logged, not raised."""
        bookmarks = self._bookmarks if bookmarks is None else bookmarks
        try:
            write_bookmarks(self.path, [bookmark.to_dict() for bookmark in bookmarks])
        except PersistenceError as exc:
            logger.error("Error saving bookmarks: %s", exc)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    async def list_bookmarks(self, tag: Optional[str] = None) -> List[Bookmark]:
        """Return all bookmarks, or those tagged with ``tag``."""
        return filter_by_tag(self._bookmarks, tag)

    async def search(self, query: str, tag: Optional[str] = None) -> List[Bookmark]:
        """Return bookmarks matching ``query`` after the optional tag filter."""
        return search_bookmarks(self._bookmarks, query, tag)

    async def get_bookmark(self, bookmark_id: str) -> Bookmark:
        return self._bookmarks[self._index_of(bookmark_id)]

    def _index_of(self, bookmark_id: str) -> int:
        for index, bookmark in enumerate(self._bookmarks):
            if bookmark.id == bookmark_id:
                return index
        raise NotFoundError(bookmark_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    async def create_bookmark(self, data: BookmarkIn) -> Bookmark:
        """Validate ``data``, add it as the newest bookmark and persist.

        When the title is missing and the URL is valid, the page title
        is fetched first.  Raises ``ValidationError`` listing every
        violated rule.
        """
        if not (data.title or "").strip() and is_valid_url((data.url or "").strip()):
            fetched = await self._title_fetcher(data.url.strip())
            if fetched:
                data = data.model_copy(update={"title": fetched})

        errors = validate_bookmark_input(data)
        if errors:
            raise ValidationError(errors)

        async with self._lock:
            existing = {bookmark.id for bookmark in self._bookmarks}
            bookmark_id = generate_id()
            while bookmark_id in existing:
                bookmark_id = generate_id()
            bookmark = Bookmark(id=bookmark_id, created_at=utc_timestamp(), **self._normalize(data))
            self._bookmarks.insert(0, bookmark)
            self._persist()
        logger.info("Created bookmark %s (%s)", bookmark.id, bookmark.url)
        return bookmark

    async def update_bookmark(self, bookmark_id: str, data: BookmarkIn) -> Bookmark:
        """Replace the editable fields of an existing bookmark and persist.

        ``id`` and ``createdAt`` are preserved.  Raises ``ValidationError``
        for invalid input and ``NotFoundError`` for an unknown id; the
        collection is unchanged in both cases.
        """
        errors = validate_bookmark_input(data)
        if errors:
            raise ValidationError(errors)

        async with self._lock:
            index = self._index_of(bookmark_id)
            updated = self._bookmarks[index].model_copy(update=self._normalize(data))
            self._bookmarks[index] = updated
            self._persist()
        logger.info("Updated bookmark %s", bookmark_id)
        return updated

    async def delete_bookmark(self, bookmark_id: str) -> Bookmark:
        """Remove a bookmark and persist.  Returns the removed record."""
        async with self._lock:
            deleted = self._bookmarks.pop(self._index_of(bookmark_id))
            self._persist()
        logger.info("Deleted bookmark %s", bookmark_id)
        return deleted

    @staticmethod
    def _normalize(data: BookmarkIn) -> Dict[str, Any]:
        """Trim strings and lowercase tags of already validated input."""
        return {
            "url": data.url.strip(),
            "title": data.title.strip(),
            "description": (data.description or "").strip(),
            "tags": [tag.lower() for tag in data.tags or []],
        }
