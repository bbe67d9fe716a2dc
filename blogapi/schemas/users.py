from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RegisterIn(BaseModel):
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)


class LoginIn(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    id: str
    username: str
    created_at: datetime

    class Config:
        from_attributes = True


class LoginOut(BaseModel):
    id: str
    username: str
    token: Optional[str] = None


class ProfileOut(BaseModel):
    id: str
    username: str
