"""
DeletedPost model: a user's trash entry for a job posting.

Permanent delete sets purged_at and keeps the row, so the job stays hidden
from that user after the entry leaves the trash.

Keyed by (original_id, user_id) so every user has an independent trash view
over the shared Job row. The snapshot keeps enough of the job (and its
company) to redisplay it without a join.
"""
import uuid
from sqlalchemy import Column, String, DateTime, JSON, Index, UniqueConstraint
from app.db.base import Base


class DeletedPost(Base):
    __tablename__ = "deleted_posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)  # who deleted it
    original_id = Column(String(36), nullable=False, index=True)  # job id, back-reference only
    job_snapshot = Column(JSON, nullable=False, default=dict)
    deleted_at = Column(DateTime, nullable=False)
    scheduled_deletion = Column(DateTime, nullable=False, index=True)
    # Set by permanent delete; the row stays as a hide marker for the user
    purged_at = Column(DateTime, nullable=True)

    __table_args__ = (
        UniqueConstraint("original_id", "user_id", name="uq_deleted_post_job_user"),
        Index("idx_deleted_posts_user_deleted", "user_id", "deleted_at"),
    )

    def __repr__(self):
        return f"<DeletedPost(id={self.id}, original_id={self.original_id}, user_id={self.user_id})>"
