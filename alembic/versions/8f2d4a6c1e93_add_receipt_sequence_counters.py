"""add receipt_sequence_counters

Revision ID: 8f2d4a6c1e93
Revises: 3b7e1c9d2a40
Create Date: 2026-10-14 16:22:08.540917

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8f2d4a6c1e93'
down_revision: Union[str, Sequence[str], None] = '3b7e1c9d2a40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """One row per issue date holding the highest sequence handed out."""
    op.create_table(
        'receipt_sequence_counters',
        sa.Column('issue_date', sa.Date(), primary_key=True, nullable=False),
        sa.Column('last_sequence', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('last_sequence >= 0', name='ck_receipt_sequence_non_negative'),
    )

    # Seed counters from complaints already stored so numbering continues
    op.execute("""
        INSERT INTO receipt_sequence_counters (issue_date, last_sequence, created_at, updated_at)
        SELECT issue_date, MAX(daily_sequence), CURRENT_TIMESTAMP, CURRENT_TIMESTAMP
        FROM complaints
        GROUP BY issue_date
    """)


def downgrade() -> None:
    """Drop receipt_sequence_counters."""
    op.drop_table('receipt_sequence_counters')
