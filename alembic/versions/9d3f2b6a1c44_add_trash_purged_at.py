"""add_trash_purged_at

Revision ID: 9d3f2b6a1c44
Revises: 4c1e7a9b2d10
Create Date: 2026-10-20 11:03:17.520114

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9d3f2b6a1c44'
down_revision: Union[str, None] = '4c1e7a9b2d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TRASH_TABLES = ('deleted_posts', 'deleted_companies')


def upgrade() -> None:
    """Add purged_at to trash tables so permanently deleted items stay hidden."""
    from sqlalchemy import inspect

    # Check if columns already exist (idempotent migration)
    inspector = inspect(op.get_bind())
    for table_name in TRASH_TABLES:
        columns = [col['name'] for col in inspector.get_columns(table_name)]
        if 'purged_at' not in columns:
            with op.batch_alter_table(table_name) as batch_op:
                batch_op.add_column(sa.Column('purged_at', sa.DateTime(), nullable=True))


def downgrade() -> None:
    for table_name in TRASH_TABLES:
        with op.batch_alter_table(table_name) as batch_op:
            batch_op.drop_column('purged_at')
