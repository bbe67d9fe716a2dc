"""initial

Revision ID: 0001
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('users',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('username', sa.String(150), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_table('posts',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('cover', sa.String(), nullable=False),
        sa.Column('author_id', sa.String(32), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False)
    )
    op.create_index('ix_posts_author_id', 'posts', ['author_id'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])
    op.create_table('post_likes',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.String(32), sa.ForeignKey('users.id', ondelete='CASCADE')),
        sa.Column('post_id', sa.String(32), sa.ForeignKey('posts.id', ondelete='CASCADE')),
        sa.UniqueConstraint('user_id', 'post_id', name='uix_user_post_like')
    )

def downgrade():
    op.drop_table('post_likes')
    op.drop_table('posts')
    op.drop_table('users')
