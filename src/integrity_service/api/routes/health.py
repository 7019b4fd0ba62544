"""
Health API Routes
"""

import logging

from fastapi import APIRouter, Depends

from integrity_service.api.dependencies import get_integrity_manager
from integrity_service.config.settings import settings
from integrity_service.core.integrity_manager import IntegrityManager
from integrity_service.infrastructure.database import db_client
from integrity_service.models import HealthResponse

router = APIRouter(prefix="/api/v1", tags=["health"])
logger = logging.getLogger(__name__)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Detailed Health Check",
    description="""
Health check including storage backend and database connectivity.

**Health Status Values**:
- healthy: storage and database accessible
- degraded: one or more systems unavailable
    """,
)
async def health_check(
    manager: IntegrityManager = Depends(get_integrity_manager)
) -> HealthResponse:
    """Health check endpoint"""
    storage_ok = await manager.storage.health_check()
    db_ok = await db_client.health_check()

    status = "healthy" if (storage_ok and db_ok) else "degraded"
    if status != "healthy":
        logger.warning(f"Health degraded: storage={storage_ok}, database={db_ok}")

    return HealthResponse(
        status=status,
        service=settings.service_name,
        storage_available=storage_ok,
        database_available=db_ok
    )
