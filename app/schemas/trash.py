"""
Pydantic schemas for soft delete, trash listing and restore endpoints.
"""
from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.schemas.job import CompanyResponse, JobResponse


class SoftDeleteRequest(BaseModel):
    """Body for soft delete calls. The user-id header is used when absent."""
    user_id: Optional[str] = Field(None, description="User moving the item to trash")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TrashRecordBase(BaseModel):
    id: str = Field(..., description="Trash record ID")
    user_id: str = Field(..., description="User who deleted the item")
    original_id: str = Field(..., description="ID of the deleted job or company")
    deleted_at: datetime = Field(..., description="When the item was moved to trash")
    scheduled_deletion: datetime = Field(..., description="When the item becomes eligible for purge")
    days_left: int = Field(..., ge=0, description="Whole days left before the item can be purged")
    expired: bool = Field(..., description="True once days_left reaches 0")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class DeletedPostResponse(TrashRecordBase):
    """A trashed job with its snapshot embedded as `job`."""
    job: Dict[str, Any] = Field(..., description="Job snapshot, including a `company` object")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "b9c1...",
                "userId": "u1",
                "originalId": "job-1",
                "deletedAt": "2026-10-19T10:00:00",
                "scheduledDeletion": "2026-10-24T10:00:00",
                "daysLeft": 5,
                "expired": False,
                "job": {
                    "id": "job-1",
                    "title": "Backend Engineer",
                    "company": {"name": "Acme", "location": "Pune", "logo": None}
                }
            }
        }


class DeletedCompanyResponse(TrashRecordBase):
    """A trashed company with its snapshot embedded as `company`."""
    company: Dict[str, Any] = Field(..., description="Company snapshot")


class SoftDeleteJobResponse(BaseModel):
    success: bool = True
    message: str
    deleted_post: DeletedPostResponse
    already_deleted: bool = False
    job_id: str
    user_id: str
    timestamp: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SoftDeleteCompanyResponse(BaseModel):
    success: bool = True
    message: str
    deleted_company: DeletedCompanyResponse
    already_deleted: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RestorePostResponse(BaseModel):
    message: str
    job: JobResponse
    applications_removed: int = Field(0, description="Applications removed so the user can apply again")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RestoreCompanyResponse(BaseModel):
    message: str
    company: CompanyResponse


class DeletedCompanyUpdateResponse(BaseModel):
    message: str
    company: DeletedCompanyResponse


class MessageResponse(BaseModel):
    message: str
