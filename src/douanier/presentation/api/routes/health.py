"""
Health check API route.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Response, status

from douanier.di.container import get_container
from douanier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check_endpoint(response: Response):
    """
    General health check endpoint.

    Returns 200 when the database answers, 503 otherwise.

    Returns:
        Health status dict
    """
    database_ok = await get_container().database.health_check()

    if not database_ok:
        logger.warning("Health check: database unavailable")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ok" if database_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "ok" if database_ok else "unavailable",
    }
