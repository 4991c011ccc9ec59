"""User schemas"""

from datetime import datetime
from pydantic import BaseModel


class UserBase(BaseModel):
    name: str
    display_name: str | None = None
    email: str | None = None
    provider_user_id: str | None = None


class UserCreate(UserBase):
    access_token: str | None = None
    refresh_token: str | None = None
    token_expires_at: datetime | None = None


class UserUpdate(BaseModel):
    display_name: str | None = None
    email: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    token_expires_at: datetime | None = None
