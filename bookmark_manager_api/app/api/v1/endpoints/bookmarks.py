"""
Bookmark endpoints for API v1.

These routes expose the bookmark store as a JSON API: list (with an
optional tag filter), search, retrieve, create, replace and delete.
Every successful response is wrapped in a ``{"success": true, ...}``
envelope.  Validation and not‑found errors raised by the service are
turned into 400 and 404 envelopes by the handlers registered in
``app.main``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from bookmark_manager_api.app.schemas.bookmark import (
    BookmarkIn,
    BookmarkListResponse,
    BookmarkResponse,
    ErrorResponse,
)
from bookmark_manager_api.app.services.bookmark_service import BookmarkService

router = APIRouter()

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


def get_bookmark_service(request: Request) -> BookmarkService:
    """Return the store attached to the running application."""
    return request.app.state.bookmark_service


@router.get("", response_model=BookmarkListResponse)
async def list_bookmarks(
    tag: Optional[str] = Query(None, description="Only return bookmarks carrying this tag"),
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkListResponse:
    """Return all bookmarks, newest first, optionally filtered by tag."""
    bookmarks = await service.list_bookmarks(tag)
    return BookmarkListResponse(data=bookmarks, count=len(bookmarks))


@router.get("/search", response_model=BookmarkListResponse)
async def search_bookmarks(
    q: str = Query("", description="Case-insensitive text matched against title, URL and description"),
    tag: Optional[str] = Query(None, description="Restrict the search to bookmarks carrying this tag"),
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkListResponse:
    """Search bookmarks by text within an optional tag."""
    bookmarks = await service.search(q, tag)
    return BookmarkListResponse(data=bookmarks, count=len(bookmarks))


@router.get("/{bookmark_id}", response_model=BookmarkResponse, responses=_ERRORS)
async def get_bookmark(
    bookmark_id: str,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    bookmark = await service.get_bookmark(bookmark_id)
    return BookmarkResponse(data=bookmark)


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def create_bookmark(
    bookmark_in: BookmarkIn,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Create a bookmark.

    If ``title`` is empty the page title is fetched from ``url``.  The
    new bookmark becomes the first entry of the list.
    """
    bookmark = await service.create_bookmark(bookmark_in)
    return BookmarkResponse(data=bookmark, message="Bookmark created successfully")


@router.put("/{bookmark_id}", response_model=BookmarkResponse, responses=_ERRORS)
async def update_bookmark(
    bookmark_id: str,
    bookmark_in: BookmarkIn,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Replace url, title, description and tags of a bookmark."""
    bookmark = await service.update_bookmark(bookmark_id, bookmark_in)
    return BookmarkResponse(data=bookmark, message="Bookmark updated successfully")


@router.delete("/{bookmark_id}", response_model=BookmarkResponse, responses=_ERRORS)
async def delete_bookmark(
    bookmark_id: str,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Delete a bookmark and return the removed record."""
    bookmark = await service.delete_bookmark(bookmark_id)
    return BookmarkResponse(data=bookmark, message="Bookmark deleted successfully")
