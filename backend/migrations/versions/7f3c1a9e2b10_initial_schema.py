"""initial vidtube schema

Revision ID: 7f3c1a9e2b10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7f3c1a9e2b10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('avatar', sa.String(length=1024), nullable=False),
        sa.Column('cover_image', sa.String(length=1024), nullable=True),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )
    op.create_index('ix_users_full_name', 'users', ['full_name'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_videos_owner_id_users', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('video_file', sa.String(length=1024), nullable=False),
        sa.Column('thumbnail', sa.String(length=1024), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_videos_owner_id', 'videos', ['owner_id'])
    op.create_index('ix_videos_created_at', 'videos', ['created_at'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_comments_owner_id_users', ondelete='CASCADE'), nullable=False),
        sa.Column('video_id', sa.Integer(), sa.ForeignKey('videos.id', name='fk_comments_video_id_videos', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_comments_owner_id', 'comments', ['owner_id'])
    op.create_index('ix_comments_video_id', 'comments', ['video_id'])
    op.create_index('ix_comments_created_at', 'comments', ['created_at'])

    op.create_table(
        'tweets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_tweets_owner_id_users', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.String(length=500), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_tweets_owner_id', 'tweets', ['owner_id'])
    op.create_index('ix_tweets_created_at', 'tweets', ['created_at'])

    op.create_table(
        'playlists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_playlists_owner_id_users', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_playlists_owner_id', 'playlists', ['owner_id'])
    op.create_index('ix_playlists_created_at', 'playlists', ['created_at'])

    op.create_table(
        'playlist_videos',
        sa.Column('playlist_id', sa.Integer(), sa.ForeignKey('playlists.id', name='fk_playlist_videos_playlist_id_playlists', ondelete='CASCADE'), primary_key=True),
        sa.Column('video_id', sa.Integer(), sa.ForeignKey('videos.id', name='fk_playlist_videos_video_id_videos', ondelete='CASCADE'), primary_key=True),
        sa.Column('added_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    op.create_table(
        'likes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('liked_by_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_likes_liked_by_id_users', ondelete='CASCADE'), nullable=False),
        sa.Column('target_kind', sa.String(length=16), nullable=False),
        sa.Column('target_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('liked_by_id', 'target_kind', 'target_id', name='uq_likes_actor_target'),
    )
    op.create_index('ix_likes_liked_by_id', 'likes', ['liked_by_id'])
    op.create_index('ix_likes_target', 'likes', ['target_kind', 'target_id'])

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('subscriber_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_subscriptions_subscriber_id_users', ondelete='CASCADE'), nullable=False),
        sa.Column('channel_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_subscriptions_channel_id_users', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscriptions_subscriber_channel'),
        sa.CheckConstraint('subscriber_id <> channel_id', name='ck_subscriptions_no_self_subscription'),
    )
    op.create_index('ix_subscriptions_subscriber_id', 'subscriptions', ['subscriber_id'])
    op.create_index('ix_subscriptions_channel_id', 'subscriptions', ['channel_id'])

    op.create_table(
        'watch_history',
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', name='fk_watch_history_user_id_users', ondelete='CASCADE'), primary_key=True),
        sa.Column('video_id', sa.Integer(), sa.ForeignKey('videos.id', name='fk_watch_history_video_id_videos', ondelete='CASCADE'), primary_key=True),
        sa.Column('watched_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )


def downgrade():
    for table in (
        'watch_history',
        'subscriptions',
        'likes',
        'playlist_videos',
        'playlists',
        'tweets',
        'comments',
        'videos',
        'users',
    ):
        op.drop_table(table)
