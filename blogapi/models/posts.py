from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from . import Base
from .likes import post_likes_table
from .users import User, new_id, utcnow


class Post(Base):
    __tablename__ = 'posts'
    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(Text, nullable=False)
    summary = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    cover = Column(String, nullable=False)
    author_id = Column(String(32), ForeignKey('users.id', ondelete='CASCADE'), index=True, nullable=False)
    likes = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    author = relationship(User, lazy='selectin')
    liked_by = relationship(User, secondary=post_likes_table, lazy='selectin')

    @property
    def liked_by_ids(self):
        return [u.id for u in self.liked_by]
