"""Cached Spotify album metadata"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.artist import Artist
    from app.models.track import Track


class Album(BaseModel):
    __tablename__ = "albums"

    provider_album_id: Mapped[str] = mapped_column(unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(nullable=False)
    album_type: Mapped[str | None]
    url: Mapped[str | None]
    href: Mapped[str | None]
    image_url: Mapped[str | None]
    release_date: Mapped[str | None]
    release_date_precision: Mapped[str | None]
    total_tracks: Mapped[int | None]
    uri: Mapped[str | None]
    artist_id: Mapped[int | None] = mapped_column(ForeignKey("artists.id", ondelete="SET NULL"), index=True)

    artist: Mapped["Artist"] = relationship(back_populates="albums")
    tracks: Mapped[list["Track"]] = relationship(back_populates="album")
