import uuid
from sqlalchemy import Column, String, DateTime, JSON, UniqueConstraint
from app.db.base import Base


class DeletedCompany(Base):
    """Trash entry for a company; independent of DeletedPost."""
    __tablename__ = "deleted_companies"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    original_id = Column(String(36), nullable=False, index=True)  # company id
    company_snapshot = Column(JSON, nullable=False, default=dict)
    deleted_at = Column(DateTime, nullable=False)
    scheduled_deletion = Column(DateTime, nullable=False, index=True)
    # Set by permanent delete; the row stays as a hide marker for the user
    purged_at = Column(DateTime, nullable=True)

    __table_args__ = (
        UniqueConstraint("original_id", "user_id", name="uq_deleted_company_company_user"),
    )
