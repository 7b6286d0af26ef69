"""create users, complaint types and complaints

Revision ID: 3b7e1c9d2a40
Revises: 
Create Date: 2026-10-12 10:04:31.118302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7e1c9d2a40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role_enum = sa.Enum('APPLICANT', 'OFFICER', 'APPROVER', 'ADMIN', name='user_role_enum')
complaint_status_enum = sa.Enum(
    'RECEIVED', 'IN_PROGRESS', 'RESOLVED', 'REJECTED', 'CLOSED', name='complaint_status_enum'
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('login_id', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('role', user_role_enum, nullable=False),
        sa.Column('phone', sa.String(length=30)),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_login_id', 'users', ['login_id'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_is_active', 'users', ['is_active'])

    op.create_table(
        'complaint_types',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_complaint_types_name', 'complaint_types', ['name'], unique=True)
    op.create_index('ix_complaint_types_is_active', 'complaint_types', ['is_active'])

    op.create_table(
        'complaints',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('receipt_number', sa.String(length=32), nullable=False, comment='CMP-YYYYMMDD-NNNN'),
        sa.Column('issue_date', sa.Date(), nullable=False),
        sa.Column('daily_sequence', sa.Integer(), nullable=False),
        sa.Column('type_id', sa.Integer(), sa.ForeignKey('complaint_types.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('applicant_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('contact_phone', sa.String(length=30), nullable=False),
        sa.Column('review_comment', sa.Text()),
        sa.Column('status', complaint_status_enum, nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('resolved_at', sa.DateTime()),
        sa.Column('closed_at', sa.DateTime()),
        sa.UniqueConstraint('issue_date', 'daily_sequence', name='uq_complaints_issue_date_sequence'),
    )
    op.create_index('ix_complaints_receipt_number', 'complaints', ['receipt_number'], unique=True)
    op.create_index('ix_complaints_issue_date', 'complaints', ['issue_date'])
    op.create_index('ix_complaints_type_id', 'complaints', ['type_id'])
    op.create_index('ix_complaints_applicant_id', 'complaints', ['applicant_id'])
    op.create_index('ix_complaints_status', 'complaints', ['status'])
    op.create_index('ix_complaints_created_at', 'complaints', ['created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('complaints')
    op.drop_table('complaint_types')
    op.drop_table('users')
    complaint_status_enum.drop(op.get_bind(), checkfirst=True)
    user_role_enum.drop(op.get_bind(), checkfirst=True)
