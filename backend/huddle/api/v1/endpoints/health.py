"""Health check API endpoint."""

from fastapi import APIRouter

from huddle.db.mysql import check_connection
from huddle.settings import settings

router = APIRouter(tags=["Health"])


@router.get("")
def health_check():
    """Health check endpoint."""
    if settings.use_memory_store:
        return {"status": "healthy", "store": "memory"}
    return {"status": "healthy" if check_connection() else "degraded", "store": settings.database_type}
