"""
Alembic upgrade runner used at startup when RUN_MIGRATIONS=1.
"""
import logging
import os
from contextlib import contextmanager

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

ADVISORY_LOCK_ID = 587120331

ALEMBIC_INI_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "alembic.ini",
)


def get_alembic_config(database_url: str) -> Config:
    alembic_cfg = Config(ALEMBIC_INI_PATH)
    alembic_cfg.set_main_option("sqlalchemy.url", database_url)
    return alembic_cfg


@contextmanager
def migration_lock(engine: Engine):
    """
    Hold a Postgres advisory lock so only one worker migrates at a time.

    No-op on other backends. If the lock can't be taken, migrations still
    run; Alembic skips revisions that are already applied.
    """
    if engine.dialect.name != "postgresql":
        yield
        return

    conn = engine.connect()
    locked = False
    try:
        try:
            conn.execute(text("SELECT pg_advisory_lock(:lock_id)"), {"lock_id": ADVISORY_LOCK_ID})
            conn.commit()
            locked = True
            logger.info("Migration lock acquired")
        except Exception as lock_error:
            logger.warning(f"Could not acquire advisory lock: {lock_error}")
        yield
    finally:
        if locked:
            try:
                conn.execute(text("SELECT pg_advisory_unlock(:lock_id)"), {"lock_id": ADVISORY_LOCK_ID})
                conn.commit()
            except Exception as unlock_error:
                logger.warning(f"Could not release advisory lock: {unlock_error}")
        conn.close()


def run_migrations(database_url: str = None):
    """
    Upgrade the database to the head revision.

    Raises:
        ValueError: no database URL configured
    """
    if database_url is None:
        from app.core import config as app_config
        database_url = app_config.DATABASE_URL

    if not database_url:
        raise ValueError("DATABASE_URL is not set")

    logger.info("RUN_MIGRATIONS=1 -> running alembic upgrade head")
    engine = create_engine(database_url, pool_pre_ping=True)
    try:
        with migration_lock(engine):
            command.upgrade(get_alembic_config(database_url), "head")
        logger.info("Migrations complete")
    except Exception:
        logger.exception("Migration failed")
        raise
    finally:
        engine.dispose()
