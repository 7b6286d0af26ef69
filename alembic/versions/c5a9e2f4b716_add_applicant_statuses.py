"""add applicant_statuses (mock applicant data)

Revision ID: c5a9e2f4b716
Revises: 8f2d4a6c1e93
Create Date: 2026-10-20 09:41:12.307554

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c5a9e2f4b716'
down_revision: Union[str, Sequence[str], None] = '8f2d4a6c1e93'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """One mock status row per applicant."""
    op.create_table(
        'applicant_statuses',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('applicant_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('income_decile', sa.Integer(), nullable=False, comment='1 (lowest) .. 10 (highest)'),
        sa.Column('asset_amount', sa.BigInteger(), nullable=False, comment='Assets, in units of 10,000 KRW'),
        sa.Column('has_vehicle', sa.Boolean(), nullable=False),
        sa.Column('has_disability', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('income_decile BETWEEN 1 AND 10', name='ck_applicant_status_income_decile'),
        sa.CheckConstraint('asset_amount >= 0', name='ck_applicant_status_asset_amount'),
    )
    op.create_index('ix_applicant_statuses_applicant_id', 'applicant_statuses', ['applicant_id'], unique=True)


def downgrade() -> None:
    """Drop applicant_statuses."""
    op.drop_table('applicant_statuses')
