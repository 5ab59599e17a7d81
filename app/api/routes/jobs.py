"""
Job endpoints for the board.

Listing is per user: jobs the caller moved to trash are left out. Soft
delete moves a job into the caller's trash (see deleted_posts.py for the
other end of the lifecycle).
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_request_user_id, http_error
from app.core.errors import LifecycleError, RecordNotFoundError
from app.core.logging_config import sanitize_log_data
from app.db.models.company import Company
from app.db.models.job import Job
from app.schemas.job import JobCreate, JobResponse
from app.schemas.trash import DeletedPostResponse, SoftDeleteJobResponse, SoftDeleteRequest
from app.services.entity_store import EntityStore
from app.services.lifecycle_service import describe_deleted_post, soft_delete_job

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[JobResponse])
def list_jobs(
    experience_level: Optional[str] = Query(None, alias="experienceLevel", description="fresher, experienced or all"),
    location: Optional[str] = Query(None, description="Filter by location (partial match)"),
    search: Optional[str] = Query(None, description="Search in title, description and skills"),
    user_id: Optional[str] = Depends(get_request_user_id),
    db: Session = Depends(get_db)
):
    """
    List active jobs.

    When a `user-id` header is sent, jobs that user moved to trash are
    excluded.
    """
    try:
        jobs = EntityStore(db).get_active_jobs(
            user_id=user_id,
            filters={
                "experience_level": experience_level,
                "location": location,
                "search": search,
            },
        )
        logger.debug(f"Jobs listed: user_id={user_id or 'anonymous'}, total={len(jobs)}")
        return [JobResponse.model_validate(job) for job in jobs]

    except Exception as e:
        logger.error(f"Failed to list jobs: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch jobs"
        )


@router.get("/{job_id}", status_code=status.HTTP_200_OK, response_model=JobResponse)
def get_job(job_id: str, db: Session = Depends(get_db)):
    """Get a job by ID. Returns 404 if it doesn't exist."""
    try:
        job = EntityStore(db).get(Job, job_id)
        if not job:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Job not found"
            )
        return JobResponse.model_validate(job)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get job"
        )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobResponse)
def create_job(job_data: JobCreate, db: Session = Depends(get_db)):
    """Create a job posting."""
    try:
        store = EntityStore(db)
        if job_data.company_id and not store.get(Company, job_data.company_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found"
            )

        fields = job_data.model_dump(exclude_none=True)
        job = store.create(Job, **fields)

        logger.info(f"Job created: job_id={job.id}, title={job.title}")

        return JobResponse.model_validate(job)

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create job"
        )


@router.post("/{job_id}/soft-delete", status_code=status.HTTP_200_OK, response_model=SoftDeleteJobResponse)
def soft_delete(
    job_id: str,
    request: Optional[SoftDeleteRequest] = Body(None),
    header_user_id: Optional[str] = Depends(get_request_user_id),
    db: Session = Depends(get_db)
):
    """
    Move a job into the caller's trash.

    The user comes from the body (`userId`) or the `user-id` header.
    Repeating the call is safe: the existing trash record is returned with
    `alreadyDeleted: true`.
    """
    user_id = (request.user_id if request else None) or header_user_id
    logger.info(
        f"Soft delete requested: job_id={job_id}, user_id={user_id}, "
        f"body={sanitize_log_data(request.model_dump() if request else {})}"
    )

    try:
        result = soft_delete_job(db, job_id, user_id)

        return SoftDeleteJobResponse(
            success=True,
            message="Job already deleted" if result.already_deleted else "Job moved to trash successfully",
            deleted_post=DeletedPostResponse.model_validate(describe_deleted_post(result.record)),
            already_deleted=result.already_deleted,
            job_id=job_id,
            user_id=result.record.user_id,
            timestamp=datetime.now(timezone.utc),
        )

    except RecordNotFoundError as e:
        logger.info(f"Soft delete of unknown job: job_id={job_id}")
        raise http_error(e, success=False, jobId=job_id)
    except LifecycleError as e:
        if e.status_code >= 500:
            logger.error(f"Failed to delete job: {e}", exc_info=True)
        raise http_error(e, success=False, received={"userId": user_id, "jobId": job_id})
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete job", "message": str(e), "success": False}
        )
