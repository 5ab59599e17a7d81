"""
Soft-delete lifecycle for job postings and companies.

Moves a live job or company into a user's trash, computes the retention
window lazily, and resolves a trash record to one of its terminal outcomes:
restored or permanently deleted. Expired records stay visible until they
are deleted explicitly or by purge_expired().

Permanent delete purges a trash record in place: the snapshot is cleared
and purged_at is set, and the row stays behind so the job or company is
still left out of that user's active list. Purged records are invisible to
every trash operation.

Multi-step operations run on one session and commit once. Trash records
are resolved with a conditional DELETE or UPDATE first, so when two
requests race on the same record the loser sees RecordNotFoundError.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import ADMIN_USER_ID
from app.core.errors import (
    LifecycleValidationError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from app.core.retention import (
    get_days_left,
    get_retention_window,
    get_scheduled_deletion,
    utcnow,
)
from app.db.models.company import Company
from app.db.models.deleted_company import DeletedCompany
from app.db.models.deleted_post import DeletedPost
from app.db.models.job import EXPERIENCE_LEVELS, Job
from app.services.entity_store import EntityStore

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_LOCATION = "Unknown Location"

JOB_SNAPSHOT_DEFAULTS = {
    "title": "Unknown Job Title",
    "description": "No description available",
    "location": UNKNOWN_LOCATION,
    "salary": "Not specified",
    "skills": "",
}

# Snapshot key -> Company column
COMPANY_FIELDS = {
    "name": "name",
    "website": "website",
    "linkedinUrl": "linkedin_url",
    "logo": "logo",
    "location": "location",
    "industry": "industry",
    "size": "size",
    "founded": "founded",
}


@dataclass
class SoftDeleteResult:
    record: Any
    already_deleted: bool = False


@dataclass
class RestoreResult:
    entity: Any
    applications_removed: int = 0


def _require(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise LifecycleValidationError(message)
    return str(value).strip()


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        return None


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _get_live_record(store: EntityStore, model, record_id: str, message: str):
    """Trash record by id; purged records count as missing."""
    record = store.get(model, record_id)
    if record is None or record.purged_at is not None:
        raise RecordNotFoundError(message)
    return record


# ----------------------------------------------------------------------
# Snapshots
# ----------------------------------------------------------------------

def snapshot_company(company: Company) -> Dict[str, Any]:
    snapshot = {key: getattr(company, column) for key, column in COMPANY_FIELDS.items()}
    snapshot["id"] = company.id
    snapshot["createdAt"] = _isoformat(company.created_at)
    return snapshot


def snapshot_job(job: Job) -> Dict[str, Any]:
    """Job fields plus enough of its company to redisplay it without a join."""
    company = None
    if job.company is not None:
        company = {
            "id": job.company.id,
            "name": job.company.name,
            "location": job.company.location,
            "logo": job.company.logo,
        }
    return {
        "id": job.id,
        "title": job.title,
        "description": job.description,
        "location": job.location,
        "salary": job.salary,
        "skills": job.skills,
        "requirements": job.requirements,
        "closingDate": _isoformat(job.closing_date),
        "experienceLevel": job.experience_level,
        "experienceMin": job.experience_min,
        "experienceMax": job.experience_max,
        "isActive": job.is_active,
        "companyId": job.company_id,
        "company": company,
    }


def normalize_job_snapshot(snapshot: Optional[Dict[str, Any]], original_id: str, scheduled_deletion: datetime) -> Dict[str, Any]:
    """
    Fill gaps in a stored job snapshot so it can always be displayed or restored.

    Missing fields fall back to placeholder text; a missing closing date
    falls back to the record's scheduled deletion time.
    """
    job = dict(snapshot or {})
    job["id"] = job.get("id") or original_id
    for key, default in JOB_SNAPSHOT_DEFAULTS.items():
        if not job.get(key):
            job[key] = default
    if not job.get("closingDate"):
        job["closingDate"] = _isoformat(scheduled_deletion)

    company = job.get("company") or {}
    job["company"] = {
        **company,
        "name": company.get("name") or UNKNOWN_COMPANY,
        "location": company.get("location") or job["location"] or UNKNOWN_LOCATION,
        "logo": company.get("logo"),
    }
    return job


def normalize_company_snapshot(snapshot: Optional[Dict[str, Any]], original_id: str) -> Dict[str, Any]:
    company = dict(snapshot or {})
    company["id"] = company.get("id") or original_id
    company["name"] = company.get("name") or UNKNOWN_COMPANY
    company["location"] = company.get("location") or UNKNOWN_LOCATION
    for key in COMPANY_FIELDS:
        company.setdefault(key, None)
    return company


# ----------------------------------------------------------------------
# Read-time views
# ----------------------------------------------------------------------

def _trash_view(record, now: datetime) -> Dict[str, Any]:
    days_left = get_days_left(record.deleted_at, now)
    return {
        "id": record.id,
        "user_id": record.user_id,
        "original_id": record.original_id,
        "deleted_at": record.deleted_at,
        "scheduled_deletion": record.scheduled_deletion,
        "days_left": days_left,
        "expired": days_left == 0,
    }


def describe_deleted_post(record: DeletedPost, now: Optional[datetime] = None) -> Dict[str, Any]:
    view = _trash_view(record, now or utcnow())
    view["job"] = normalize_job_snapshot(record.job_snapshot, record.original_id, record.scheduled_deletion)
    return view


def describe_deleted_company(record: DeletedCompany, now: Optional[datetime] = None) -> Dict[str, Any]:
    view = _trash_view(record, now or utcnow())
    view["company"] = normalize_company_snapshot(record.company_snapshot, record.original_id)
    return view


# ----------------------------------------------------------------------
# Jobs
# ----------------------------------------------------------------------

def soft_delete_job(db: Session, job_id: str, user_id: str, now: Optional[datetime] = None) -> SoftDeleteResult:
    """
    Move a job into the user's trash.

    Idempotent per (job, user): a second call returns the existing record
    with already_deleted=True instead of creating a duplicate. A job whose
    trash record was purged stays deleted the same way.

    Raises:
        LifecycleValidationError: blank user or job id
        RecordNotFoundError: the job does not exist
    """
    user_id = _require(user_id, "User ID is required")
    job_id = _require(job_id, "Job ID is required")
    store = EntityStore(db)

    job = store.get(Job, job_id)
    if job is None:
        raise RecordNotFoundError("Job not found")

    existing = store.find_deleted_post(job_id, user_id)
    if existing is not None:
        logger.info(f"Job already in trash: job_id={job_id}, user_id={user_id}, deleted_post_id={existing.id}")
        return SoftDeleteResult(existing, already_deleted=True)

    deleted_at = now or utcnow()
    try:
        record = store.create(
            DeletedPost,
            user_id=user_id,
            original_id=job_id,
            job_snapshot=snapshot_job(job),
            deleted_at=deleted_at,
            scheduled_deletion=get_scheduled_deletion(deleted_at),
        )
    except IntegrityError:
        # A concurrent request for the same (job, user) won
        existing = store.find_deleted_post(job_id, user_id)
        if existing is None:
            raise StoreUnavailableError("Failed to record deleted post")
        return SoftDeleteResult(existing, already_deleted=True)

    logger.info(f"Job moved to trash: job_id={job_id}, user_id={user_id}, deleted_post_id={record.id}")
    return SoftDeleteResult(record)


def list_deleted_posts_for_user(db: Session, user_id: str, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Every trash record the user created, newest first, with daysLeft."""
    store = EntityStore(db)
    now = now or utcnow()
    views = []
    for record in store.get_user_deleted_posts(user_id):
        try:
            views.append(describe_deleted_post(record, now))
        except Exception as e:
            # One malformed snapshot must not hide the rest of the trash
            logger.error(f"Failed to describe deleted post {record.id}: {e}", exc_info=True)
    return views


def _job_from_snapshot(store: EntityStore, record: DeletedPost) -> Job:
    """Re-create a job row that disappeared while it sat in the trash."""
    snapshot = normalize_job_snapshot(record.job_snapshot, record.original_id, record.scheduled_deletion)

    experience_level = snapshot.get("experienceLevel")
    if experience_level not in EXPERIENCE_LEVELS:
        experience_level = "fresher"

    company_id = snapshot.get("companyId") or snapshot["company"].get("id")
    if company_id and store.get(Company, company_id) is None:
        company_id = None

    closing_date = _parse_datetime(snapshot.get("closingDate")) or utcnow() + get_retention_window()

    return store.create(
        Job,
        commit=False,
        id=record.original_id,
        title=snapshot["title"],
        description=snapshot["description"],
        location=snapshot["location"],
        salary=snapshot["salary"],
        skills=snapshot["skills"],
        requirements=snapshot.get("requirements"),
        closing_date=closing_date,
        experience_level=experience_level,
        experience_min=_as_int(snapshot.get("experienceMin"), 0),
        experience_max=_as_int(snapshot.get("experienceMax"), 1),
        is_active=True,
        company_id=company_id,
    )


def restore_deleted_post(db: Session, deleted_post_id: str) -> RestoreResult:
    """
    Take a job back out of the trash.

    The deleting user's applications for the job are removed so they can
    apply again. Applications by other users are left alone.

    Raises:
        RecordNotFoundError: unknown id, or another request resolved it first
    """
    store = EntityStore(db)
    record = _get_live_record(store, DeletedPost, deleted_post_id, "Deleted post not found")

    job_id, user_id = record.original_id, record.user_id
    try:
        if not store.delete_trash_record(DeletedPost, deleted_post_id, commit=False):
            raise RecordNotFoundError("Deleted post not found")

        job = store.get(Job, job_id)
        if job is None:
            logger.warning(f"Job {job_id} missing on restore, re-creating from snapshot")
            job = _job_from_snapshot(store, record)

        removed = store.delete_applications_for_job(job_id, user_id=user_id, commit=False)
        store.commit()
    except Exception:
        store.rollback()
        raise

    db.refresh(job)
    logger.info(
        f"Deleted post restored: deleted_post_id={deleted_post_id}, job_id={job_id}, "
        f"user_id={user_id}, applications_removed={removed}"
    )
    return RestoreResult(job, applications_removed=removed)


def permanently_delete_post(db: Session, deleted_post_id: str, now: Optional[datetime] = None) -> None:
    """
    Purge a trash record for good.

    The record drops out of the trash but keeps hiding the job from the
    deleting user. The shared job row is untouched; the deleting user's
    applications for it go with the record.
    """
    store = EntityStore(db)
    record = _get_live_record(store, DeletedPost, deleted_post_id, "Deleted post not found")

    job_id, user_id = record.original_id, record.user_id
    try:
        if not store.mark_purged(DeletedPost, deleted_post_id, now or utcnow(), commit=False, job_snapshot={}):
            raise RecordNotFoundError("Deleted post not found")
        store.delete_applications_for_job(job_id, user_id=user_id, commit=False)
        store.commit()
    except Exception:
        store.rollback()
        raise

    logger.info(f"Deleted post purged: deleted_post_id={deleted_post_id}, job_id={job_id}, user_id={user_id}")


# ----------------------------------------------------------------------
# Companies
# ----------------------------------------------------------------------

def soft_delete_company(db: Session, company_id: str, user_id: Optional[str] = None, now: Optional[datetime] = None) -> SoftDeleteResult:
    company_id = _require(company_id, "Company ID is required")
    user_id = (user_id or "").strip() or ADMIN_USER_ID
    store = EntityStore(db)

    company = store.get(Company, company_id)
    if company is None:
        raise RecordNotFoundError("Company not found")

    existing = store.find_deleted_company(company_id, user_id)
    if existing is not None:
        return SoftDeleteResult(existing, already_deleted=True)

    deleted_at = now or utcnow()
    try:
        record = store.create(
            DeletedCompany,
            user_id=user_id,
            original_id=company_id,
            company_snapshot=snapshot_company(company),
            deleted_at=deleted_at,
            scheduled_deletion=get_scheduled_deletion(deleted_at),
        )
    except IntegrityError:
        existing = store.find_deleted_company(company_id, user_id)
        if existing is None:
            raise StoreUnavailableError("Failed to record deleted company")
        return SoftDeleteResult(existing, already_deleted=True)

    logger.info(f"Company moved to trash: company_id={company_id}, user_id={user_id}, deleted_company_id={record.id}")
    return SoftDeleteResult(record)


def list_deleted_companies(db: Session, user_id: Optional[str] = None, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    store = EntityStore(db)
    now = now or utcnow()
    return [describe_deleted_company(record, now) for record in store.get_deleted_companies(user_id)]


def update_deleted_company(db: Session, deleted_company_id: str, fields: Dict[str, Any]) -> DeletedCompany:
    """Edit the trashed snapshot; the edits are applied on restore."""
    store = EntityStore(db)
    record = _get_live_record(store, DeletedCompany, deleted_company_id, "Deleted company not found")

    snapshot = dict(record.company_snapshot or {})
    snapshot.update({key: value for key, value in fields.items() if key in COMPANY_FIELDS})
    # Reassign so the JSON column is flagged dirty
    return store.update(DeletedCompany, deleted_company_id, company_snapshot=snapshot)


def restore_deleted_company(db: Session, deleted_company_id: str) -> RestoreResult:
    store = EntityStore(db)
    record = _get_live_record(store, DeletedCompany, deleted_company_id, "Deleted company not found")

    snapshot = normalize_company_snapshot(record.company_snapshot, record.original_id)
    values = {column: snapshot.get(key) for key, column in COMPANY_FIELDS.items()}
    try:
        if not store.delete_trash_record(DeletedCompany, deleted_company_id, commit=False):
            raise RecordNotFoundError("Deleted company not found")

        company = store.update(Company, record.original_id, commit=False, **values)
        if company is None:
            logger.warning(f"Company {record.original_id} missing on restore, re-creating from snapshot")
            company = store.create(Company, commit=False, id=record.original_id, **values)
        store.commit()
    except Exception:
        store.rollback()
        raise

    db.refresh(company)
    logger.info(f"Deleted company restored: deleted_company_id={deleted_company_id}, company_id={company.id}")
    return RestoreResult(company)


def permanently_delete_company(db: Session, deleted_company_id: str, now: Optional[datetime] = None) -> None:
    """Purge a company trash record; the company stays hidden from its deleter."""
    store = EntityStore(db)
    if not store.mark_purged(DeletedCompany, deleted_company_id, now or utcnow(), company_snapshot={}):
        raise RecordNotFoundError("Deleted company not found")
    logger.info(f"Deleted company purged: deleted_company_id={deleted_company_id}")


# ----------------------------------------------------------------------
# Sweeper
# ----------------------------------------------------------------------

def purge_expired(db: Session, now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Purge every trash record past its scheduled deletion.

    Nothing calls this implicitly; run it from scripts/purge_expired_trash.py
    or a cron job. Records resolved concurrently by users are skipped.

    Returns:
        Counts of purged deleted_posts and deleted_companies
    """
    store = EntityStore(db)
    now = now or utcnow()
    counts = {"deleted_posts": 0, "deleted_companies": 0}

    # Ids are collected up front; each purge commits and expires loaded rows
    post_ids = [record.id for record in store.get_expired(DeletedPost, now)]
    company_ids = [record.id for record in store.get_expired(DeletedCompany, now)]

    for post_id in post_ids:
        try:
            permanently_delete_post(db, post_id, now)
            counts["deleted_posts"] += 1
        except RecordNotFoundError:
            logger.debug(f"Deleted post {post_id} already resolved, skipping")

    for company_id in company_ids:
        try:
            permanently_delete_company(db, company_id, now)
            counts["deleted_companies"] += 1
        except RecordNotFoundError:
            logger.debug(f"Deleted company {company_id} already resolved, skipping")

    logger.info(f"Expired trash purged: {counts}")
    return counts
