"""add gpa_history table

Revision ID: 8c4d2e6f1a93
Revises: 3e1f0a9c2b71
Create Date: 2026-10-19 00:10:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c4d2e6f1a93'
down_revision: Union[str, Sequence[str], None] = '3e1f0a9c2b71'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'gpa_history',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('gpa', sa.Float(), nullable=False),
        sa.Column('label', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_index('ix_gpa_history_id', 'gpa_history', ['id'])
    op.create_index('ix_gpa_history_user_id', 'gpa_history', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_gpa_history_user_id', table_name='gpa_history')
    op.drop_index('ix_gpa_history_id', table_name='gpa_history')
    op.drop_table('gpa_history')
