from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from zvcapi.containers import Container
from zvcapi.database.session import get_db
from zvcapi.schemas.health import HealthCheckResponse
from zvcapi.services.redis_service import RedisService
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
@inject
async def health_check(
    db: Session = Depends(get_db),
    redis_service: RedisService = Depends(Provide[Container.services.redis_service]),
) -> HealthCheckResponse:
    """Health check endpoint (DB + Redis)."""
    response = HealthCheckResponse()
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check database failure: {e}")
        response.database = False
        response.error = "database unavailable"

    response.redis = await redis_service.ping()
    if not (response.database and response.redis):
        response.status = "degraded"
    return response
