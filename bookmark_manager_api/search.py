"""
Tag filtering and text search over bookmarks.

These functions are shared by the server‑side store and the API
client, so both agree on what matches.  They accept either stored
``Bookmark`` models or the plain dictionaries returned by the API, and
import nothing from ``bookmark_manager_api.app`` so that the client can
use them without building the application.
"""

from typing import Any, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def _field(bookmark: Any, name: str) -> Any:
    if isinstance(bookmark, dict):
        return bookmark.get(name)
    return getattr(bookmark, name, None)


def filter_by_tag(bookmarks: Iterable[T], tag: Optional[str] = None) -> List[T]:
    """Return the bookmarks whose tags contain ``tag`` (case‑insensitive)."""
    if not tag:
        return list(bookmarks)
    wanted = tag.lower()
    return [bookmark for bookmark in bookmarks if wanted in (_field(bookmark, "tags") or [])]


def search_bookmarks(bookmarks: Iterable[T], query: str, tag: Optional[str] = None) -> List[T]:
    """Filter ``bookmarks`` by an optional tag, then by ``query``.

    A bookmark matches when the lowercase query is a substring of its
    lowercase title, URL or description.  A blank query matches
    everything.  Relative order is preserved.
    """
    selected = filter_by_tag(bookmarks, tag)
    needle = (query or "").strip().lower()
    if not needle:
        return selected
    return [
        bookmark
        for bookmark in selected
        if any(
            needle in (_field(bookmark, name) or "").lower()
            for name in ("title", "url", "description")
        )
    ]
