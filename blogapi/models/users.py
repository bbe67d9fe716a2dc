import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from . import Base


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = 'users'
    id = Column(String(32), primary_key=True, default=new_id)
    username = Column(String(150), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
