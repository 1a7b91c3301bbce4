"""create users, jobs and applications

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2026-10-19 17:40:12.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4f2a9c1d7e30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('type', sa.Enum('SEEKER', 'EMPLOYER', name='user_type'), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=True),
        sa.Column('skills', sa.Text(), nullable=True),
        sa.Column('resume_info', sa.Text(), nullable=True),
        sa.Column('company_name', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('employer_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(length=100), nullable=False),
        sa.Column('salary', sa.Float(), nullable=False),
        sa.Column('company_name', sa.String(length=100), nullable=True),
        sa.Column('posted_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['employer_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_job_employer_id', 'jobs', ['employer_id'])
    op.create_index('idx_job_posted_at', 'jobs', ['posted_at'])

    # The composite key is what makes applying twice impossible
    op.create_table(
        'applications',
        sa.Column('seeker_id', sa.Integer(), nullable=False),
        sa.Column('job_id', sa.Integer(), nullable=False),
        sa.Column('applied_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['seeker_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('seeker_id', 'job_id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('applications')
    op.drop_index('idx_job_posted_at', table_name='jobs')
    op.drop_index('idx_job_employer_id', table_name='jobs')
    op.drop_table('jobs')
    # the enum type outlives the table on PostgreSQL
    op.drop_table('users')
    sa.Enum(name='user_type').drop(op.get_bind(), checkfirst=True)
