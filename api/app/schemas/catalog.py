"""Cached catalog schemas"""
from pydantic import BaseModel, ConfigDict


class ArtistOut(BaseModel):
    id: int
    provider_artist_id: str
    name: str
    url: str | None = None
    uri: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AlbumOut(BaseModel):
    id: int
    provider_album_id: str
    name: str
    album_type: str | None = None
    image_url: str | None = None
    release_date: str | None = None
    total_tracks: int | None = None
    uri: str | None = None

    model_config = ConfigDict(from_attributes=True)


class TrackOut(BaseModel):
    id: int
    provider_track_id: str
    name: str
    uri: str
    url: str | None = None
    duration_ms: int | None = None
    explicit: bool = False
    popularity: int | None = None
    preview_url: str | None = None
    album: AlbumOut | None = None
    artist: ArtistOut | None = None

    model_config = ConfigDict(from_attributes=True)
