"""create analytics_events table

Revision ID: 5c1d2e3f4a5b
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5c1d2e3f4a5b'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'analytics_events',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    # Recent-events-by-name lookups
    op.create_index(
        'ix_analytics_events_name_created',
        'analytics_events',
        ['name', 'created_at']
    )


def downgrade() -> None:
    op.drop_index('ix_analytics_events_name_created', table_name='analytics_events')
    op.drop_table('analytics_events')
