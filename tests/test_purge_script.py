"""
Tests for scripts/purge_expired_trash.py.
"""
from datetime import timedelta

from app.core.retention import utcnow
from app.db.models.deleted_post import DeletedPost
from app.services.lifecycle_service import soft_delete_job
from scripts import purge_expired_trash


def test_dry_run_keeps_records(db, job, session_factory, monkeypatch):
    monkeypatch.setattr(purge_expired_trash, "SessionLocal", session_factory)
    soft_delete_job(db, "job-1", "u1", now=utcnow() - timedelta(days=7))

    assert purge_expired_trash.run(dry_run=True) is True
    assert db.query(DeletedPost).count() == 1


def test_run_purges_expired(db, job, other_job, session_factory, monkeypatch):
    monkeypatch.setattr(purge_expired_trash, "SessionLocal", session_factory)
    soft_delete_job(db, "job-1", "u1", now=utcnow() - timedelta(days=7))
    soft_delete_job(db, "job-2", "u1")

    assert purge_expired_trash.run() is True
    db.expire_all()
    live = db.query(DeletedPost).filter(DeletedPost.purged_at.is_(None)).all()
    assert [record.original_id for record in live] == ["job-2"]
    assert db.query(DeletedPost).count() == 2
