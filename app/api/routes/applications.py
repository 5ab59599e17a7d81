"""
Application endpoints.

A user holds at most one application per job; restoring a trashed job
clears the user's old application so they can apply again.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_db, http_error
from app.core.errors import ApplicationConflictError, LifecycleError
from app.db.models.application import Application
from app.db.models.job import Job
from app.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationWithJobResponse,
)
from app.schemas.trash import MessageResponse
from app.services.entity_store import EntityStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["Applications"])


@router.post("", status_code=status.HTTP_200_OK, response_model=ApplicationResponse)
def create_application(application_data: ApplicationCreate, db: Session = Depends(get_db)):
    """
    Apply to a job.

    Returns 404 for an unknown job and 409 if the user already applied.
    """
    store = EntityStore(db)
    try:
        if not store.get(Job, application_data.job_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Job not found"
            )

        try:
            application = store.create(
                Application,
                user_id=application_data.user_id,
                job_id=application_data.job_id,
            )
        except IntegrityError:
            raise ApplicationConflictError("Application already exists for this job")

        logger.info(
            f"Application created: application_id={application.id}, "
            f"user_id={application.user_id}, job_id={application.job_id}"
        )
        return ApplicationResponse.model_validate(application)

    except HTTPException:
        raise
    except LifecycleError as e:
        if e.status_code >= 500:
            logger.error(f"Failed to create application: {e}", exc_info=True)
        raise http_error(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create application: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create application"
        )


@router.get("/user/{user_id}", status_code=status.HTTP_200_OK, response_model=List[ApplicationWithJobResponse])
def get_user_applications(user_id: str, db: Session = Depends(get_db)):
    """Get a user's applications joined with their job and company."""
    try:
        applications = EntityStore(db).get_user_applications(user_id)
        logger.debug(f"Applications listed: user_id={user_id}, total={len(applications)}")
        return [ApplicationWithJobResponse.model_validate(application) for application in applications]
    except Exception as e:
        logger.error(f"Failed to fetch applications: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch applications"
        )


@router.delete("/{application_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
def delete_application(application_id: str, db: Session = Depends(get_db)):
    try:
        if not EntityStore(db).delete(Application, application_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Application not found"
            )
        logger.info(f"Application deleted: application_id={application_id}")
        return MessageResponse(message="Application deleted successfully")
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete application: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete application"
        )
