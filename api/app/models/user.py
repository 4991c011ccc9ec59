"""User model"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.event import Event


class User(BaseModel):
    """Party host with a linked Spotify account"""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(unique=True, index=True, nullable=False)
    display_name: Mapped[str | None]
    email: Mapped[str | None]
    provider_user_id: Mapped[str | None] = mapped_column(index=True)

    access_token: Mapped[str | None]
    refresh_token: Mapped[str | None]
    token_expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    hosted_events: Mapped[list["Event"]] = relationship(
        back_populates="host",
        cascade="all, delete-orphan",
    )
