"""
Health check endpoint
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime, timezone

from order_fulfillment import __version__
from order_fulfillment.database import get_db
from order_fulfillment.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Health check endpoint

    Returns service health status including:
    - Database connectivity
    - Reconciliation scheduler state
    - Timestamp
    """
    # Check database connection
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        scheduler_status = {"running": False}
    else:
        scheduler_status = {
            "running": scheduler.is_running,
            "busy": scheduler.is_busy,
            "passes": scheduler.passes,
            "last_run_at": scheduler.last_run_at.isoformat() if scheduler.last_run_at else None,
            "last_error": scheduler.last_error,
        }

    return {
        "service": settings.SERVICE_NAME,
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "database": db_status,
        "scheduler": scheduler_status,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/")
def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "docs": "/docs"
    }
