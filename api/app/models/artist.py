"""Cached Spotify artist metadata"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.album import Album
    from app.models.track import Track


class Artist(BaseModel):
    __tablename__ = "artists"

    provider_artist_id: Mapped[str] = mapped_column(unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(nullable=False)
    url: Mapped[str | None]
    href: Mapped[str | None]
    artist_type: Mapped[str | None]
    uri: Mapped[str | None]

    albums: Mapped[list["Album"]] = relationship(back_populates="artist")
    tracks: Mapped[list["Track"]] = relationship(back_populates="artist")
