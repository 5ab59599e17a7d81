"""
Company endpoints.

Only what the trash lifecycle needs: create, read, list (minus the caller's
trash) and soft delete.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_request_user_id, http_error
from app.core.config import ADMIN_USER_ID
from app.core.errors import LifecycleError
from app.db.models.company import Company
from app.schemas.job import CompanyCreate, CompanyResponse
from app.schemas.trash import DeletedCompanyResponse, SoftDeleteCompanyResponse, SoftDeleteRequest
from app.services.entity_store import EntityStore
from app.services.lifecycle_service import describe_deleted_company, soft_delete_company

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/companies", tags=["Companies"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[CompanyResponse])
def list_companies(
    user_id: Optional[str] = Depends(get_request_user_id),
    db: Session = Depends(get_db)
):
    """
    List companies, leaving out the ones the caller moved to trash.

    Without a `user-id` header the admin's trash is applied.
    """
    try:
        companies = EntityStore(db).get_active_companies(user_id or ADMIN_USER_ID)
        return [CompanyResponse.model_validate(company) for company in companies]
    except Exception as e:
        logger.error(f"Failed to list companies: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch companies"
        )


@router.get("/{company_id}", status_code=status.HTTP_200_OK, response_model=CompanyResponse)
def get_company(company_id: str, db: Session = Depends(get_db)):
    try:
        company = EntityStore(db).get(Company, company_id)
        if not company:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found"
            )
        return CompanyResponse.model_validate(company)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch company: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch company"
        )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CompanyResponse)
def create_company(company_data: CompanyCreate, db: Session = Depends(get_db)):
    try:
        company = EntityStore(db).create(Company, **company_data.model_dump(exclude_none=True))
        logger.info(f"Company created: company_id={company.id}, name={company.name}")
        return CompanyResponse.model_validate(company)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create company: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create company"
        )


@router.post("/{company_id}/soft-delete", status_code=status.HTTP_200_OK, response_model=SoftDeleteCompanyResponse)
def soft_delete(
    company_id: str,
    request: Optional[SoftDeleteRequest] = Body(None),
    header_user_id: Optional[str] = Depends(get_request_user_id),
    db: Session = Depends(get_db)
):
    """
    Move a company into the trash of the calling user (the admin by default).
    """
    user_id = (request.user_id if request else None) or header_user_id
    try:
        result = soft_delete_company(db, company_id, user_id)
        return SoftDeleteCompanyResponse(
            message="Company already deleted" if result.already_deleted else "Company moved to deleted companies",
            deleted_company=DeletedCompanyResponse.model_validate(describe_deleted_company(result.record)),
            already_deleted=result.already_deleted,
        )

    except LifecycleError as e:
        if e.status_code >= 500:
            logger.error(f"Failed to soft delete company {company_id}: {e}", exc_info=True)
        raise http_error(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to soft delete company {company_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to move company to deleted companies"
        )
