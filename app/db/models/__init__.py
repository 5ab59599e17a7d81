"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from app.db.models.company import Company
from app.db.models.job import Job, EXPERIENCE_LEVELS
from app.db.models.application import Application
from app.db.models.deleted_post import DeletedPost
from app.db.models.deleted_company import DeletedCompany

# Explicitly export all models for clarity
__all__ = [
    "Company",
    "Job",
    "EXPERIENCE_LEVELS",
    "Application",
    "DeletedPost",
    "DeletedCompany",
]
