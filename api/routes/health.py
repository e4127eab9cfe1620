"""
Health check endpoint with database connectivity
"""

from fastapi import APIRouter, Depends
from api.dependencies import get_gateway
from core.config import settings
from core.exceptions import BackendError
from schemas.api import HealthCheckResponse
from store.gateway import StoreGateway
from datetime import datetime
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(gateway: StoreGateway = Depends(get_gateway)):
    """
    Health check endpoint.

    Returns:
    - Database connectivity status
    - Active upsert strategy
    """
    db_connected = False

    try:
        db_connected = await gateway.ping()
    except BackendError as e:
        logger.error(f"Database connection failed: {e.message}")

    return HealthCheckResponse(
        status="healthy" if db_connected else "unhealthy",
        timestamp=datetime.utcnow(),
        database_connected=db_connected,
        upsert_strategy=settings.UPSERT_STRATEGY
    )
