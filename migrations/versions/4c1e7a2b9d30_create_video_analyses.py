"""create video_analyses

Revision ID: 4c1e7a2b9d30
Revises:
Create Date: 2026-10-19 09:12:41.208311

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c1e7a2b9d30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'video_analyses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tiktok_url', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('author_username', sa.String(length=255), nullable=True),
        sa.Column('author_profile_url', sa.Text(), nullable=True),
        sa.Column('author_followers', sa.BIGINT(), nullable=True),
        sa.Column('views_count', sa.BIGINT(), nullable=True),
        sa.Column('likes_count', sa.BIGINT(), nullable=True),
        sa.Column('comments_count', sa.BIGINT(), nullable=True),
        sa.Column('shares_count', sa.BIGINT(), nullable=True),
        sa.Column('saves_count', sa.BIGINT(), nullable=True),
        sa.Column('engagement_rate', sa.Float(), nullable=True),
        sa.Column('likes_ratio', sa.Float(), nullable=True),
        sa.Column('comments_ratio', sa.Float(), nullable=True),
        sa.Column('shares_ratio', sa.Float(), nullable=True),
        sa.Column('saves_ratio', sa.Float(), nullable=True),
        sa.Column('total_engagements', sa.BIGINT(), nullable=True),
        sa.Column('viral_score', sa.Integer(), nullable=True),
        sa.Column('retention_rate', sa.Float(), nullable=True),
        sa.Column('average_retention', sa.Float(), nullable=True),
        sa.Column('seo_score', sa.Integer(), nullable=True),
        sa.Column('seo_niche', sa.Text(), nullable=True),
        sa.Column('seo_recommendations', sa.Text(), nullable=True),
        sa.Column('hashtags', sa.Text(), nullable=True),
        sa.Column('retention_curve', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_video_analyses_created', 'video_analyses', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_video_analyses_created', table_name='video_analyses')
    op.drop_table('video_analyses')
