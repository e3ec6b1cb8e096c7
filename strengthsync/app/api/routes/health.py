"""
Health check endpoint
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text

from strengthsync.app.config import settings
from strengthsync.app.core.theme_catalog import get_theme_catalog
from strengthsync.app.database import get_session_factory
from strengthsync.app.models.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(session_factory=Depends(get_session_factory)):
    """Report database connectivity and catalog size"""
    database = "ok"
    db = session_factory()
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check database error: {str(e)}")
        database = "unavailable"
    finally:
        db.close()

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        database=database,
        themes_loaded=len(get_theme_catalog()),
        environment=settings.ENVIRONMENT,
    )
