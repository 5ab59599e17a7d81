"""
Shared route dependencies.
"""
from typing import Optional
from fastapi import Header, HTTPException

from app.core.errors import LifecycleError
from app.db.session import SessionLocal


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_request_user_id(user_id: Optional[str] = Header(None, alias="user-id")) -> Optional[str]:
    """Acting user from the `user-id` header, if sent."""
    if user_id is None or not user_id.strip():
        return None
    return user_id.strip()


def http_error(error: LifecycleError, **extra) -> HTTPException:
    """Translate a lifecycle error into an HTTPException with a JSON body."""
    detail = {"error": error.message, "message": error.message}
    detail.update(extra)
    return HTTPException(status_code=error.status_code, detail=detail)
