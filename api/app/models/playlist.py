"""Playlist model"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.event import Event
    from app.models.queue_item import QueueItem


class Playlist(BaseModel):
    """Ordered collection of queue entries shared by one event."""

    __tablename__ = "playlists"

    name: Mapped[str] = mapped_column(nullable=False)
    provider_playlist_id: Mapped[str | None] = mapped_column(index=True)

    event: Mapped["Event"] = relationship(back_populates="playlist", uselist=False)
    queue: Mapped[list["QueueItem"]] = relationship(
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="QueueItem.position",
    )
