from sqlalchemy import Table, Column, Integer, String, ForeignKey, UniqueConstraint
from . import Base

post_likes_table = Table(
    'post_likes', Base.metadata,
    Column('id', Integer, primary_key=True),
    Column('user_id', String(32), ForeignKey('users.id', ondelete='CASCADE')),
    Column('post_id', String(32), ForeignKey('posts.id', ondelete='CASCADE')),
    UniqueConstraint('user_id', 'post_id', name='uix_user_post_like')
)
