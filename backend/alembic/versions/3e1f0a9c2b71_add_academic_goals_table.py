"""add academic_goals table

Revision ID: 3e1f0a9c2b71
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e1f0a9c2b71'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()
    if 'academic_goals' not in tables:
        op.create_table(
            'academic_goals',
            sa.Column('user_id', sa.String(), primary_key=True, nullable=False),
            sa.Column('current_gpa', sa.Float(), nullable=False, server_default='0'),
            sa.Column('target_gpa', sa.Float(), nullable=False, server_default='4'),
            sa.Column('courses_taken', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('total_courses', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('courses_remaining', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('required_gpa', sa.String(length=16), nullable=False, server_default='0.00'),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        )
        op.create_index('ix_academic_goals_user_id', 'academic_goals', ['user_id'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP INDEX IF EXISTS ix_academic_goals_user_id')
    op.execute('DROP TABLE IF EXISTS academic_goals')
