"""
Pydantic schemas for application endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.schemas.job import JobResponse


class ApplicationCreate(BaseModel):
    """Schema for applying to a job."""
    user_id: str = Field(..., description="Applicant user ID", min_length=1)
    job_id: str = Field(..., description="Job applied to", min_length=1)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ApplicationResponse(BaseModel):
    """Schema for application response."""
    id: str = Field(..., description="Application ID")
    user_id: str = Field(..., description="Applicant user ID")
    job_id: str = Field(..., description="Job applied to")
    created_at: Optional[datetime] = Field(None, description="When the application was made")

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ApplicationWithJobResponse(ApplicationResponse):
    """Application joined with its job (and the job's company) for display."""
    job: Optional[JobResponse] = Field(None, description="Job applied to")
