"""
Trash endpoints for companies.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, http_error
from app.core.errors import LifecycleError
from app.schemas.job import CompanyResponse, CompanyUpdate
from app.schemas.trash import (
    DeletedCompanyResponse,
    DeletedCompanyUpdateResponse,
    MessageResponse,
    RestoreCompanyResponse,
)
from app.services.lifecycle_service import (
    describe_deleted_company,
    list_deleted_companies,
    permanently_delete_company,
    restore_deleted_company,
    update_deleted_company,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/deleted-companies", tags=["Deleted Companies"])


def _raise(e: Exception, db: Session, action: str):
    if isinstance(e, LifecycleError):
        if e.status_code >= 500:
            logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise http_error(e)
    db.rollback()
    logger.error(f"Failed to {action}: {e}", exc_info=True)
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}"
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=List[DeletedCompanyResponse])
def get_deleted_companies(
    user_id: Optional[str] = Query(None, alias="userId", description="Only records deleted by this user"),
    db: Session = Depends(get_db)
):
    """List trashed companies with `daysLeft`."""
    try:
        return [DeletedCompanyResponse.model_validate(view) for view in list_deleted_companies(db, user_id)]
    except Exception as e:
        _raise(e, db, "fetch deleted companies")


@router.post("/{deleted_company_id}/restore", status_code=status.HTTP_200_OK, response_model=RestoreCompanyResponse)
def restore(deleted_company_id: str, db: Session = Depends(get_db)):
    """Restore a trashed company, applying any edits made while it was in trash."""
    try:
        result = restore_deleted_company(db, deleted_company_id)
        return RestoreCompanyResponse(
            message="Company restored successfully",
            company=CompanyResponse.model_validate(result.entity),
        )
    except Exception as e:
        _raise(e, db, "restore company")


@router.put("/{deleted_company_id}", status_code=status.HTTP_200_OK, response_model=DeletedCompanyUpdateResponse)
def update(deleted_company_id: str, company_data: CompanyUpdate, db: Session = Depends(get_db)):
    """Edit a trashed company's snapshot."""
    try:
        fields = company_data.model_dump(by_alias=True, exclude_unset=True)
        record = update_deleted_company(db, deleted_company_id, fields)
        return DeletedCompanyUpdateResponse(
            message="Deleted company updated successfully",
            company=DeletedCompanyResponse.model_validate(describe_deleted_company(record)),
        )
    except Exception as e:
        _raise(e, db, "update deleted company")


@router.delete("/{deleted_company_id}", status_code=status.HTTP_200_OK, response_model=MessageResponse)
def permanent_delete(deleted_company_id: str, db: Session = Depends(get_db)):
    try:
        permanently_delete_company(db, deleted_company_id)
        return MessageResponse(message="Company permanently deleted")
    except Exception as e:
        _raise(e, db, "permanently delete company")
