"""Queue entry model"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.playlist import Playlist
    from app.models.track import Track


class QueueItem(BaseModel):
    """A track queued on a playlist.

    Pending entries have ``played_at`` unset and play in ascending ``position``
    order. Played entries keep ``-abs(position)`` so the magnitude still
    records where they sat in the pending order.
    """

    __tablename__ = "queue_items"
    __table_args__ = (Index("ix_queue_items_playlist_position", "playlist_id", "position"),)

    playlist_id: Mapped[int] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    track_id: Mapped[int] = mapped_column(ForeignKey("tracks.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(nullable=False)
    played_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    playlist: Mapped["Playlist"] = relationship(back_populates="queue")
    track: Mapped["Track"] = relationship(back_populates="queue_items")

    @property
    def is_played(self) -> bool:
        return self.played_at is not None
