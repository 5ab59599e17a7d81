"""
Script to permanently delete trash records past their retention window.

Nothing purges expired records on its own; schedule this (cron, CI job)
if expired posts should disappear instead of lingering as "expired".
Run: python -m scripts.purge_expired_trash [--dry-run]
"""
import argparse
import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.retention import utcnow
from app.db.models.deleted_company import DeletedCompany
from app.db.models.deleted_post import DeletedPost
from app.db.session import SessionLocal
from app.services.entity_store import EntityStore
from app.services.lifecycle_service import purge_expired

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run(dry_run: bool = False) -> bool:
    db = SessionLocal()
    try:
        now = utcnow()
        if dry_run:
            store = EntityStore(db)
            posts = store.get_expired(DeletedPost, now)
            companies = store.get_expired(DeletedCompany, now)
            logger.info(f"Dry run: {len(posts)} deleted posts and {len(companies)} deleted companies are expired")
            return True

        counts = purge_expired(db, now)
        logger.info(
            f"Purged {counts['deleted_posts']} deleted posts and "
            f"{counts['deleted_companies']} deleted companies"
        )
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Error purging expired trash: {e}", exc_info=True)
        return False
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Purge expired trash records")
    parser.add_argument("--dry-run", action="store_true", help="Only report what would be purged")
    args = parser.parse_args()

    if not run(dry_run=args.dry_run):
        sys.exit(1)
