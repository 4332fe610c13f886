"""initial_schema

Revision ID: a1f3c9e2b7d4
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1f3c9e2b7d4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the GoonerGram schema.

    Uniqueness carried by the database:
    1. users.username and users.email
    2. one like per (post, user)
    3. one partner row per unordered pair (pair_key)
    4. one private chat per unordered pair (private_key)
    """
    op.create_table(
        'users',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('email', sa.String(255), nullable=True, unique=True),
        sa.Column('first_name', sa.String(255), nullable=True),
        sa.Column('last_name', sa.String(255), nullable=True),
        sa.Column('profile_image_url', sa.String(500), nullable=True),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('username_change_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('username_changed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'posts',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('video_url', sa.String(500), nullable=True),
        sa.Column('video_duration', sa.Integer(), nullable=True),
        sa.Column('likes_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('comments_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_posts_user_id', 'posts', ['user_id'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])

    op.create_table(
        'post_likes',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('post_id', sa.String(255), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('post_id', 'user_id', name='uq_post_likes_post_user'),
    )
    op.create_index('ix_post_likes_user_id', 'post_likes', ['user_id'])
    op.create_index('ix_post_likes_created_at', 'post_likes', ['created_at'])

    op.create_table(
        'post_comments',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('post_id', sa.String(255), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_post_comments_created_at', 'post_comments', ['created_at'])
    op.create_index('idx_post_comments_post_created', 'post_comments', ['post_id', 'created_at'])

    op.create_table(
        'stories',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('video_url', sa.String(500), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_stories_user_id', 'stories', ['user_id'])
    op.create_index('ix_stories_expires_at', 'stories', ['expires_at'])
    op.create_index('ix_stories_created_at', 'stories', ['created_at'])

    op.create_table(
        'gooning_partners',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('partner_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('pair_key', sa.String(520), nullable=False, unique=True),
        sa.Column('status', sa.String(8), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_gooning_partners_user_id', 'gooning_partners', ['user_id'])
    op.create_index('ix_gooning_partners_partner_id', 'gooning_partners', ['partner_id'])
    op.create_index('ix_gooning_partners_created_at', 'gooning_partners', ['created_at'])

    op.create_table(
        'chat_rooms',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('is_group', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_by', sa.String(255), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('private_key', sa.String(520), nullable=True, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_chat_rooms_created_at', 'chat_rooms', ['created_at'])

    op.create_table(
        'chat_room_members',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('chat_room_id', sa.String(255), sa.ForeignKey('chat_rooms.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('chat_room_id', 'user_id', name='uq_chat_room_members_room_user'),
    )
    op.create_index('ix_chat_room_members_chat_room_id', 'chat_room_members', ['chat_room_id'])
    op.create_index('ix_chat_room_members_user_id', 'chat_room_members', ['user_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('chat_room_id', sa.String(255), sa.ForeignKey('chat_rooms.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('message_type', sa.String(5), nullable=False),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('video_url', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])
    op.create_index('idx_messages_room_created', 'messages', ['chat_room_id', 'created_at'])

    op.create_table(
        'global_messages',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('sender_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_global_messages_created_at', 'global_messages', ['created_at'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('from_user_id', sa.String(255), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
        sa.Column('type', sa.String(8), nullable=False),
        sa.Column('post_id', sa.String(255), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])
    op.create_index('idx_notifications_user_read', 'notifications', ['user_id', 'is_read'])


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_table('notifications')
    op.drop_table('global_messages')
    op.drop_table('messages')
    op.drop_table('chat_room_members')
    op.drop_table('chat_rooms')
    op.drop_table('gooning_partners')
    op.drop_table('stories')
    op.drop_table('post_comments')
    op.drop_table('post_likes')
    op.drop_table('posts')
    op.drop_table('users')
