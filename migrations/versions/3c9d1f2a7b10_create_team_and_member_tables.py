"""Create team and member tables

Revision ID: 3c9d1f2a7b10
Revises:
Create Date: 2025-01-14 10:02:11.418223

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9d1f2a7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'team',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )
    # member.team_id has no foreign key constraint; deleting a team leaves it as is.
    op.create_table(
        'member',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=255), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=True),
    )
    op.create_index('idx_member_team_id', 'member', ['team_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_member_team_id', table_name='member')
    op.drop_table('member')
    op.drop_table('team')
