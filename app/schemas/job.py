"""
Pydantic schemas for job and company endpoints.

Responses use camelCase field names on the wire.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CompanyBase(BaseModel):
    """Base company schema with common fields."""
    name: str = Field(..., description="Company name", min_length=1, max_length=255)
    website: Optional[str] = Field(None, description="Company website URL")
    linkedin_url: Optional[str] = Field(None, description="LinkedIn page URL")
    logo: Optional[str] = Field(None, description="Logo URL")
    location: Optional[str] = Field(None, description="Headquarters location")
    industry: Optional[str] = Field(None, description="Industry")
    size: Optional[str] = Field(None, description="Headcount range")
    founded: Optional[str] = Field(None, description="Founding year")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CompanyCreate(CompanyBase):
    """Schema for creating a new company."""
    id: Optional[str] = Field(None, description="Company ID (generated if omitted)")


class CompanyUpdate(BaseModel):
    """Schema for editing a company snapshot while it sits in the trash."""
    name: Optional[str] = Field(None, description="Company name", min_length=1, max_length=255)
    website: Optional[str] = Field(None, description="Company website URL")
    linkedin_url: Optional[str] = Field(None, description="LinkedIn page URL")
    logo: Optional[str] = Field(None, description="Logo URL")
    location: Optional[str] = Field(None, description="Headquarters location")
    industry: Optional[str] = Field(None, description="Industry")
    size: Optional[str] = Field(None, description="Headcount range")
    founded: Optional[str] = Field(None, description="Founding year")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CompanyResponse(CompanyBase):
    """Schema for company response."""
    id: str = Field(..., description="Company ID")
    created_at: Optional[datetime] = Field(None, description="Company creation timestamp")

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class JobBase(BaseModel):
    """Base job schema with common fields."""
    title: str = Field(..., description="Job title", min_length=1, max_length=255)
    description: str = Field(..., description="Job description")
    location: str = Field(..., description="Job location")
    salary: Optional[str] = Field(None, description="Salary range")
    skills: Optional[str] = Field(None, description="Comma separated skills")
    requirements: Optional[str] = Field(None, description="Requirements")
    closing_date: Optional[datetime] = Field(None, description="Applications close at")
    experience_level: str = Field(
        default="fresher",
        description="Experience level",
        pattern="^(fresher|experienced)$"
    )
    experience_min: int = Field(0, ge=0, description="Minimum years of experience")
    experience_max: int = Field(1, ge=0, description="Maximum years of experience")
    company_id: Optional[str] = Field(None, description="Owning company ID")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class JobCreate(JobBase):
    """Schema for creating a new job."""
    id: Optional[str] = Field(None, description="Job ID (generated if omitted)")
    is_active: bool = Field(True, description="Whether the posting is open")


class JobResponse(JobBase):
    """Schema for job response."""
    id: str = Field(..., description="Job ID")
    is_active: bool = Field(..., description="Whether the posting is open")
    created_at: Optional[datetime] = Field(None, description="Job creation timestamp")
    company: Optional[CompanyResponse] = Field(None, description="Company offering the job")

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "job-1",
                "title": "Senior Software Engineer",
                "description": "Build the job board backend.",
                "location": "Hyderabad",
                "salary": "12-18 LPA",
                "skills": "python,fastapi,sqlalchemy",
                "closingDate": "2026-11-15T00:00:00",
                "experienceLevel": "experienced",
                "experienceMin": 3,
                "experienceMax": 6,
                "isActive": True,
                "companyId": "company-1",
                "createdAt": "2026-10-01T09:00:00",
                "company": None
            }
        }
