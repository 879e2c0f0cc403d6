"""Health check and utility routes"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("nutritrack.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name, "version": settings.app_version}


@router.get("/health-check/db")
def database_health(db: Session = Depends(get_db)):
    """Run a trivial query to confirm the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "reachable"}
    except Exception as e:
        logger.exception("Database health check failed")
        return {"status": "degraded", "database": "unreachable", "error": str(e)}
