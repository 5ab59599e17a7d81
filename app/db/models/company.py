import uuid
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, index=True)
    website = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    logo = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    industry = Column(String, nullable=True)
    size = Column(String, nullable=True)
    founded = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    jobs = relationship("Job", back_populates="company")

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}')>"
