"""
Trash endpoints for job postings.

Listing never fails the page: any internal error degrades to an empty
list. Restore and permanent delete propagate failures, since silently
losing either would leave the trash inconsistent.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_db, http_error
from app.core.errors import LifecycleError
from app.schemas.job import JobResponse
from app.schemas.trash import DeletedPostResponse, MessageResponse, RestorePostResponse
from app.services.lifecycle_service import (
    list_deleted_posts_for_user,
    permanently_delete_post,
    restore_deleted_post,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/deleted-posts", tags=["Deleted Posts"])

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}


@router.get("/user/{user_id}")
def get_user_deleted_posts(user_id: str, db: Session = Depends(get_db)):
    """
    Get the user's trashed jobs, each with `daysLeft` and an embedded `job`.

    Always answers with a JSON array.
    """
    if not user_id.strip():
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=[], headers=NO_CACHE_HEADERS)

    try:
        views = list_deleted_posts_for_user(db, user_id)
        posts = [
            DeletedPostResponse.model_validate(view).model_dump(mode="json", by_alias=True)
            for view in views
        ]
        logger.debug(f"Deleted posts listed: user_id={user_id}, total={len(posts)}")
        return JSONResponse(status_code=status.HTTP_200_OK, content=posts, headers=NO_CACHE_HEADERS)

    except Exception as e:
        logger.error(f"Failed to fetch deleted posts for user {user_id}: {e}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_200_OK, content=[], headers=NO_CACHE_HEADERS)


@router.post("/{deleted_post_id}/restore", status_code=status.HTTP_200_OK, response_model=RestorePostResponse)
def restore(deleted_post_id: str, db: Session = Depends(get_db)):
    """
    Restore a trashed job.

    The deleting user's applications for the job are removed so they can
    apply again; `applicationsRemoved` reports how many.
    """
    try:
        result = restore_deleted_post(db, deleted_post_id)
        return RestorePostResponse(
            message="Post restored successfully",
            job=JobResponse.model_validate(result.entity),
            applications_removed=result.applications_removed,
        )

    except LifecycleError as e:
        if e.status_code >= 500:
            logger.error(f"Failed to restore deleted post: {e}", exc_info=True)
        raise http_error(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to restore deleted post: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to restore deleted post"
        )


@router.delete("/{deleted_post_id}/permanent", status_code=status.HTTP_200_OK, response_model=MessageResponse)
def permanent_delete(deleted_post_id: str, db: Session = Depends(get_db)):
    """Permanently delete a trashed job. Returns 404 if it is already gone."""
    try:
        permanently_delete_post(db, deleted_post_id)
        return MessageResponse(message="Post permanently deleted")

    except LifecycleError as e:
        if e.status_code >= 500:
            logger.error(f"Failed to permanently delete post: {e}", exc_info=True)
        raise http_error(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to permanently delete post: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to permanently delete post"
        )
