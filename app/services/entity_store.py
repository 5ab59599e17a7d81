"""
Entity store for jobs, applications, companies and trash records.

Wraps a SQLAlchemy session with per-model CRUD plus the joined queries the
lifecycle engine and routes need. Every call is atomic on its own; callers
that chain several calls (restore + application cleanup) pass
``commit=False`` and commit once at the end.
"""
import logging
from functools import wraps
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import StoreUnavailableError
from app.db.base import Base
from app.db.models.application import Application
from app.db.models.company import Company
from app.db.models.deleted_company import DeletedCompany
from app.db.models.deleted_post import DeletedPost
from app.db.models.job import Job

logger = logging.getLogger(__name__)


def _store_call(func):
    """Roll back and re-raise database failures as StoreUnavailableError."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except IntegrityError:
            # Constraint violations carry meaning for callers (duplicates)
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store call {func.__name__} failed: {e}", exc_info=True)
            raise StoreUnavailableError(f"Store unavailable during {func.__name__}") from e
    return wrapper


class EntityStore:
    """CRUD and lifecycle queries over a single database session."""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Generic CRUD
    # ------------------------------------------------------------------

    @_store_call
    def create(self, model: Type[Base], commit: bool = True, **fields) -> Any:
        obj = model(**fields)
        self.db.add(obj)
        if commit:
            self.db.commit()
            self.db.refresh(obj)
        else:
            self.db.flush()
        return obj

    @_store_call
    def get(self, model: Type[Base], obj_id: str) -> Optional[Any]:
        return self.db.get(model, obj_id)

    @_store_call
    def list(self, model: Type[Base]) -> List[Any]:
        return self.db.query(model).all()

    @_store_call
    def update(self, model: Type[Base], obj_id: str, commit: bool = True, **fields) -> Optional[Any]:
        obj = self.db.get(model, obj_id)
        if obj is None:
            return None
        for field, value in fields.items():
            setattr(obj, field, value)
        if commit:
            self.db.commit()
            self.db.refresh(obj)
        else:
            self.db.flush()
        return obj

    @_store_call
    def delete(self, model: Type[Base], obj_id: str, commit: bool = True) -> bool:
        """
        Delete a row by id with a single conditional DELETE.

        Returns:
            True if this call removed the row, False if it was already gone.
            Two concurrent callers on the same id never both see True.
        """
        removed = (
            self.db.query(model)
            .filter(model.id == obj_id)
            .delete(synchronize_session=False)
        )
        if commit:
            self.db.commit()
        return removed > 0

    @_store_call
    def delete_trash_record(self, model: Type[Base], obj_id: str, commit: bool = True) -> bool:
        """Conditional DELETE of a trash record that has not been purged."""
        removed = (
            self.db.query(model)
            .filter(model.id == obj_id, model.purged_at.is_(None))
            .delete(synchronize_session=False)
        )
        if commit:
            self.db.commit()
        return removed > 0

    @_store_call
    def mark_purged(self, model: Type[Base], obj_id: str, purged_at, commit: bool = True, **fields) -> bool:
        """
        Purge a trash record in place with a single conditional UPDATE.

        The row is kept (snapshot cleared via `fields`) so the item stays
        out of the user's active list. Returns False if the record is gone
        or was already purged.
        """
        values = {model.purged_at: purged_at}
        values.update({getattr(model, field): value for field, value in fields.items()})
        updated = (
            self.db.query(model)
            .filter(model.id == obj_id, model.purged_at.is_(None))
            .update(values, synchronize_session=False)
        )
        if commit:
            self.db.commit()
        return updated > 0

    @_store_call
    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    # ------------------------------------------------------------------
    # Jobs and companies
    # ------------------------------------------------------------------

    @_store_call
    def get_active_jobs(self, user_id: Optional[str] = None, filters: Optional[Dict[str, Optional[str]]] = None) -> List[Job]:
        """
        Active jobs, excluding the ones this user moved to trash (purged
        trash records included).

        Supported filters: experience_level, location, search (title,
        description, skills).
        """
        filters = filters or {}
        query = (
            self.db.query(Job)
            .options(joinedload(Job.company))
            .filter(Job.is_active.is_(True))
        )

        if user_id:
            trashed = select(DeletedPost.original_id).where(DeletedPost.user_id == user_id)
            query = query.filter(Job.id.not_in(trashed))

        experience_level = filters.get("experience_level")
        if experience_level and experience_level != "all":
            query = query.filter(Job.experience_level == experience_level)

        location = filters.get("location")
        if location:
            query = query.filter(Job.location.ilike(f"%{location}%"))

        search = filters.get("search")
        if search:
            term = f"%{search}%"
            query = query.filter(
                or_(
                    Job.title.ilike(term),
                    Job.description.ilike(term),
                    Job.skills.ilike(term),
                )
            )

        return query.order_by(Job.created_at.desc()).all()

    @_store_call
    def get_active_companies(self, user_id: Optional[str] = None) -> List[Company]:
        query = self.db.query(Company)
        if user_id:
            trashed = select(DeletedCompany.original_id).where(DeletedCompany.user_id == user_id)
            query = query.filter(Company.id.not_in(trashed))
        return query.order_by(Company.name).all()

    # ------------------------------------------------------------------
    # Trash records
    # ------------------------------------------------------------------

    @_store_call
    def find_deleted_post(self, job_id: str, user_id: str) -> Optional[DeletedPost]:
        return self.db.query(DeletedPost).filter(
            and_(
                DeletedPost.original_id == job_id,
                DeletedPost.user_id == user_id,
            )
        ).first()

    @_store_call
    def find_deleted_company(self, company_id: str, user_id: str) -> Optional[DeletedCompany]:
        return self.db.query(DeletedCompany).filter(
            and_(
                DeletedCompany.original_id == company_id,
                DeletedCompany.user_id == user_id,
            )
        ).first()

    @_store_call
    def get_user_deleted_posts(self, user_id: str) -> List[DeletedPost]:
        return (
            self.db.query(DeletedPost)
            .filter(DeletedPost.user_id == user_id)
            .filter(DeletedPost.purged_at.is_(None))
            .order_by(DeletedPost.deleted_at.desc())
            .all()
        )

    @_store_call
    def get_deleted_companies(self, user_id: Optional[str] = None) -> List[DeletedCompany]:
        query = self.db.query(DeletedCompany).filter(DeletedCompany.purged_at.is_(None))
        if user_id:
            query = query.filter(DeletedCompany.user_id == user_id)
        return query.order_by(DeletedCompany.deleted_at.desc()).all()

    @_store_call
    def get_expired(self, model: Type[Base], now) -> List[Any]:
        return (
            self.db.query(model)
            .filter(model.scheduled_deletion <= now, model.purged_at.is_(None))
            .all()
        )

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    @_store_call
    def get_user_applications(self, user_id: str) -> List[Application]:
        """Applications for a user with their job and company eagerly loaded."""
        return (
            self.db.query(Application)
            .options(joinedload(Application.job).joinedload(Job.company))
            .filter(Application.user_id == user_id)
            .order_by(Application.created_at.desc())
            .all()
        )

    @_store_call
    def delete_applications_for_job(self, job_id: str, user_id: Optional[str] = None, commit: bool = True) -> int:
        """Remove applications for a job, scoped to one user when given."""
        query = self.db.query(Application).filter(Application.job_id == job_id)
        if user_id is not None:
            query = query.filter(Application.user_id == user_id)
        removed = query.delete(synchronize_session=False)
        if commit:
            self.db.commit()
        return removed
