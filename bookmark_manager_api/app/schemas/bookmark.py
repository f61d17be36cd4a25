"""
Pydantic schemas for bookmarks.

A bookmark is a saved URL with a title, an optional description, up to
five lowercase tags and the time it was created.  ``createdAt`` is the
wire and storage name of the creation timestamp; Python code uses
``created_at``.

``BookmarkIn`` is deliberately permissive: field rules (lengths, URL
scheme, tag case) are enforced by the bookmark service so that every
violation can be reported in a single response.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BookmarkIn(BaseModel):
    """Request body for creating or replacing a bookmark."""

    url: Optional[str] = Field(None, description="Absolute http(s) URL")
    title: Optional[str] = Field(None, description="Title; fetched from the page when empty on create")
    description: Optional[str] = Field(None, description="Optional description, up to 500 characters")
    tags: Optional[List[Any]] = Field(None, description="Up to 5 lowercase tags")


class Bookmark(BaseModel):
    """A stored bookmark record."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str
    title: str
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    created_at: str = Field(..., alias="createdAt")

    def to_dict(self) -> Dict[str, Any]:
        """Return the record with its wire field names."""
        return self.model_dump(by_alias=True)


class ErrorDetail(BaseModel):
    param: str
    msg: str


class BookmarkListResponse(BaseModel):
    success: bool = True
    data: List[Bookmark]
    count: int


class BookmarkResponse(BaseModel):
    success: bool = True
    data: Bookmark
    message: Optional[str] = None


class HealthResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[List[ErrorDetail]] = None
