"""Cached Spotify track metadata"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.album import Album
    from app.models.artist import Artist
    from app.models.queue_item import QueueItem


class Track(BaseModel):
    """Track referenced by queue entries. Shared across playlists."""

    __tablename__ = "tracks"

    provider_track_id: Mapped[str] = mapped_column(unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(nullable=False)
    uri: Mapped[str] = mapped_column(nullable=False)
    url: Mapped[str | None]
    href: Mapped[str | None]
    duration_ms: Mapped[int | None]
    explicit: Mapped[bool] = mapped_column(default=False, nullable=False)
    disc_number: Mapped[int | None]
    track_number: Mapped[int | None]
    isrc: Mapped[str | None]
    popularity: Mapped[int | None]
    preview_url: Mapped[str | None]
    is_local: Mapped[bool] = mapped_column(default=False, nullable=False)
    track_type: Mapped[str | None]
    album_id: Mapped[int | None] = mapped_column(ForeignKey("albums.id", ondelete="SET NULL"), index=True)
    artist_id: Mapped[int | None] = mapped_column(ForeignKey("artists.id", ondelete="SET NULL"), index=True)

    album: Mapped["Album"] = relationship(back_populates="tracks")
    artist: Mapped["Artist"] = relationship(back_populates="tracks")
    queue_items: Mapped[list["QueueItem"]] = relationship(back_populates="track")
