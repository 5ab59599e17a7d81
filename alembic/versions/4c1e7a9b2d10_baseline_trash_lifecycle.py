"""baseline_trash_lifecycle

Revision ID: 4c1e7a9b2d10
Revises: 
Create Date: 2026-10-19 09:12:44.118203

Production-safe migration: Only creates tables that don't exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '4c1e7a9b2d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('companies'):
        op.create_table('companies',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('website', sa.String(), nullable=True),
            sa.Column('linkedin_url', sa.String(), nullable=True),
            sa.Column('logo', sa.Text(), nullable=True),
            sa.Column('location', sa.String(), nullable=True),
            sa.Column('industry', sa.String(), nullable=True),
            sa.Column('size', sa.String(), nullable=True),
            sa.Column('founded', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_companies_name'), 'companies', ['name'], unique=False)

    if not table_exists('jobs'):
        op.create_table('jobs',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('location', sa.String(), nullable=False),
            sa.Column('salary', sa.String(), nullable=True),
            sa.Column('skills', sa.Text(), nullable=True),
            sa.Column('requirements', sa.Text(), nullable=True),
            sa.Column('closing_date', sa.DateTime(), nullable=True),
            sa.Column('experience_level', sa.String(), nullable=False),
            sa.Column('experience_min', sa.Integer(), nullable=False),
            sa.Column('experience_max', sa.Integer(), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.Column('company_id', sa.String(length=36), nullable=True),
            sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_jobs_title'), 'jobs', ['title'], unique=False)
        op.create_index(op.f('ix_jobs_company_id'), 'jobs', ['company_id'], unique=False)

    if not table_exists('applications'):
        op.create_table('applications',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('job_id', sa.String(length=36), nullable=False),
            sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('user_id', 'job_id', name='uq_application_user_job')
        )
        op.create_index(op.f('ix_applications_user_id'), 'applications', ['user_id'], unique=False)
        op.create_index(op.f('ix_applications_job_id'), 'applications', ['job_id'], unique=False)

    if not table_exists('deleted_posts'):
        op.create_table('deleted_posts',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('original_id', sa.String(length=36), nullable=False),
            sa.Column('job_snapshot', sa.JSON(), nullable=False),
            sa.Column('deleted_at', sa.DateTime(), nullable=False),
            sa.Column('scheduled_deletion', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('original_id', 'user_id', name='uq_deleted_post_job_user')
        )
        op.create_index(op.f('ix_deleted_posts_user_id'), 'deleted_posts', ['user_id'], unique=False)
        op.create_index(op.f('ix_deleted_posts_original_id'), 'deleted_posts', ['original_id'], unique=False)
        op.create_index(op.f('ix_deleted_posts_scheduled_deletion'), 'deleted_posts', ['scheduled_deletion'], unique=False)
        op.create_index('idx_deleted_posts_user_deleted', 'deleted_posts', ['user_id', 'deleted_at'], unique=False)

    if not table_exists('deleted_companies'):
        op.create_table('deleted_companies',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('original_id', sa.String(length=36), nullable=False),
            sa.Column('company_snapshot', sa.JSON(), nullable=False),
            sa.Column('deleted_at', sa.DateTime(), nullable=False),
            sa.Column('scheduled_deletion', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('original_id', 'user_id', name='uq_deleted_company_company_user')
        )
        op.create_index(op.f('ix_deleted_companies_user_id'), 'deleted_companies', ['user_id'], unique=False)
        op.create_index(op.f('ix_deleted_companies_original_id'), 'deleted_companies', ['original_id'], unique=False)
        op.create_index(op.f('ix_deleted_companies_scheduled_deletion'), 'deleted_companies', ['scheduled_deletion'], unique=False)


def downgrade() -> None:
    """Downgrade: Drop lifecycle tables."""
    op.drop_index(op.f('ix_deleted_companies_scheduled_deletion'), table_name='deleted_companies')
    op.drop_index(op.f('ix_deleted_companies_original_id'), table_name='deleted_companies')
    op.drop_index(op.f('ix_deleted_companies_user_id'), table_name='deleted_companies')
    op.drop_table('deleted_companies')

    op.drop_index('idx_deleted_posts_user_deleted', table_name='deleted_posts')
    op.drop_index(op.f('ix_deleted_posts_scheduled_deletion'), table_name='deleted_posts')
    op.drop_index(op.f('ix_deleted_posts_original_id'), table_name='deleted_posts')
    op.drop_index(op.f('ix_deleted_posts_user_id'), table_name='deleted_posts')
    op.drop_table('deleted_posts')

    op.drop_index(op.f('ix_applications_job_id'), table_name='applications')
    op.drop_index(op.f('ix_applications_user_id'), table_name='applications')
    op.drop_table('applications')

    op.drop_index(op.f('ix_jobs_company_id'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_title'), table_name='jobs')
    op.drop_table('jobs')

    op.drop_index(op.f('ix_companies_name'), table_name='companies')
    op.drop_table('companies')
