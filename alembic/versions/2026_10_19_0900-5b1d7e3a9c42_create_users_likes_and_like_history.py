"""create_users_likes_and_like_history

Revision ID: 5b1d7e3a9c42
Revises:
Create Date: 2026-10-19 09:00:12.418305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1d7e3a9c42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('phone_number', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_phone_number', 'users', ['phone_number'], unique=True)

    # No foreign keys: likes reference users by phone number only
    op.create_table(
        'likes',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('from_phone_number', sa.String(), nullable=False),
        sa.Column('to_phone_number', sa.String(), nullable=False),
        sa.Column('is_endorsed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('used_search', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_mother_quality', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_notified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('qualities', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_likes_from_phone_number', 'likes', ['from_phone_number'])
    op.create_index('ix_likes_to_phone_number', 'likes', ['to_phone_number'])
    op.create_index('ix_likes_created_at', 'likes', ['created_at'])

    op.create_table(
        'like_history',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('from_phone_number', sa.String(), nullable=False),
        sa.Column('to_phone_number', sa.String(), nullable=False),
        sa.Column('action', sa.String(length=16), nullable=False),
        sa.Column('qualities', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_like_history_from_phone_number', 'like_history', ['from_phone_number'])
    op.create_index('ix_like_history_to_phone_number', 'like_history', ['to_phone_number'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_like_history_to_phone_number', table_name='like_history')
    op.drop_index('ix_like_history_from_phone_number', table_name='like_history')
    op.drop_table('like_history')

    op.drop_index('ix_likes_created_at', table_name='likes')
    op.drop_index('ix_likes_to_phone_number', table_name='likes')
    op.drop_index('ix_likes_from_phone_number', table_name='likes')
    op.drop_table('likes')

    op.drop_index('ix_users_phone_number', table_name='users')
    op.drop_table('users')
