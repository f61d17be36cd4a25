"""Health check endpoint."""

from fastapi import APIRouter

from bookmark_manager_api.app.schemas.bookmark import HealthResponse

router = APIRouter()

HEALTH_MESSAGE = "Bookmark Manager API is running"


@router.get("", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(message=HEALTH_MESSAGE)
