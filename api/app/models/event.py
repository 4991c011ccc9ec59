"""Listening party event model"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.playlist import Playlist
    from app.models.track import Track
    from app.models.user import User


class Event(BaseModel):
    """A host's listening party. Each event drives exactly one playlist."""

    __tablename__ = "events"

    host_user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    playlist_id: Mapped[int] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(nullable=False)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)
    last_queue_item_added: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    playing_track_id: Mapped[int | None] = mapped_column(ForeignKey("tracks.id", ondelete="SET NULL"))

    host: Mapped["User"] = relationship(back_populates="hosted_events")
    playlist: Mapped["Playlist"] = relationship(back_populates="event")
    playing_track: Mapped["Track"] = relationship()
