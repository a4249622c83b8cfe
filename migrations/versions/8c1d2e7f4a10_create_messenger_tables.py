"""Create messenger tables

Revision ID: 8c1d2e7f4a10
Revises:
Create Date: 2026-10-19 10:12:31.418230

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '8c1d2e7f4a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    # Create messages table
    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('recipient_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('sender_id <> recipient_id', name='ck_messages_not_self'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])
    op.create_index(
        'idx_messages_pair_created', 'messages', ['sender_id', 'recipient_id', 'created_at']
    )
    op.create_index('idx_messages_recipient_created', 'messages', ['recipient_id', 'created_at'])

    # Create groups table
    op.create_table(
        'groups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_groups_created_at', 'groups', ['created_at'])

    # Create group_members table
    op.create_table(
        'group_members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('group_id', 'user_id', name='uq_group_members_pair'),
    )
    op.create_index('ix_group_members_created_at', 'group_members', ['created_at'])

    # Create group_messages table
    op.create_table(
        'group_messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_group_messages_created_at', 'group_messages', ['created_at'])
    op.create_index('idx_group_messages_group_created', 'group_messages', ['group_id', 'created_at'])

    # Create ai_chat_history table
    op.create_table(
        'ai_chat_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('response', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_ai_chat_history_created_at', 'ai_chat_history', ['created_at'])
    op.create_index('idx_ai_chat_history_user_created', 'ai_chat_history', ['user_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('idx_ai_chat_history_user_created', table_name='ai_chat_history')
    op.drop_index('ix_ai_chat_history_created_at', table_name='ai_chat_history')
    op.drop_table('ai_chat_history')

    op.drop_index('idx_group_messages_group_created', table_name='group_messages')
    op.drop_index('ix_group_messages_created_at', table_name='group_messages')
    op.drop_table('group_messages')

    op.drop_index('ix_group_members_created_at', table_name='group_members')
    op.drop_table('group_members')

    op.drop_index('ix_groups_created_at', table_name='groups')
    op.drop_table('groups')

    op.drop_index('idx_messages_recipient_created', table_name='messages')
    op.drop_index('idx_messages_pair_created', table_name='messages')
    op.drop_index('ix_messages_created_at', table_name='messages')
    op.drop_table('messages')

    op.drop_index('ix_users_created_at', table_name='users')
    op.drop_table('users')
