"""
Top‑level router for version 1 of the API.

This router aggregates the endpoint modules.  The application mounts
it at the root, so bookmarks are served from ``/bookmarks`` and the
health check from ``/health``.
"""

from fastapi import APIRouter

from .endpoints import bookmarks, health

router = APIRouter()

router.include_router(bookmarks.router, prefix="/bookmarks", tags=["bookmarks"])
router.include_router(health.router, prefix="/health", tags=["health"])
