"""
Health Check Router
Simple health check endpoint
"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from budget_tracker.core.config import settings
from budget_tracker.db.session import get_db
from budget_tracker.utils.scheduler import get_scheduler_status

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.
    Returns API status, database connectivity and whether the scheduler runs.
    """
    database = "connected"
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database check failed: {e}")
        database = "error"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "service": settings.PROJECT_NAME,
        "database": database,
        "scheduler_running": get_scheduler_status().get("running", False),
        "timestamp": datetime.utcnow().isoformat(),
    }
