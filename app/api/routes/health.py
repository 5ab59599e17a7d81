"""
Liveness endpoints: /health checks the database, /api only the process.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db

router = APIRouter(tags=["Health"])

API_VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Always answers 200; `status` is "degraded" when the database can't be reached.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status, status = "connected", "ok"
    except SQLAlchemyError as e:
        db_status, status = f"error: {e}", "degraded"

    return {
        "status": status,
        "timestamp": _now(),
        "database": db_status,
        "version": API_VERSION,
    }


@router.get("/api")
def api_root():
    return {
        "message": "JobPortal API is running",
        "status": "healthy",
        "timestamp": _now(),
    }
