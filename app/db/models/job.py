"""
Job model for postings shown on the board.

A soft delete never removes the row: the posting stays shared between users
and is hidden per user through DeletedPost records.
"""
import uuid
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base

EXPERIENCE_LEVELS = ("fresher", "experienced")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    salary = Column(String, nullable=True)
    skills = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    closing_date = Column(DateTime, nullable=True)
    experience_level = Column(String, nullable=False, default="fresher")  # fresher | experienced
    experience_min = Column(Integer, nullable=False, default=0)
    experience_max = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    company = relationship("Company", back_populates="jobs")

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}')>"
