from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class AuthorOut(BaseModel):
    id: str
    username: str

    class Config:
        from_attributes = True


class PostOut(BaseModel):
    id: str
    title: str
    summary: str
    content: str
    cover: str
    author: AuthorOut
    likes: int = 0
    liked_by: List[str] = Field(default_factory=list, validation_alias='liked_by_ids')
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PostFields(BaseModel):
    title: str = ''
    summary: str = ''
    content: str = ''
