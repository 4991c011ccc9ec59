"""Spotify pass-through schemas"""
from pydantic import BaseModel, ConfigDict


class DeviceOut(BaseModel):
    device_id: str
    name: str
    device_type: str | None = None
    is_active: bool = False
    volume_percent: int | None = None

    model_config = ConfigDict(from_attributes=True)


class ProviderArtistOut(BaseModel):
    provider_artist_id: str
    name: str
    url: str | None = None
    uri: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProviderAlbumOut(BaseModel):
    provider_album_id: str
    name: str
    album_type: str | None = None
    image_url: str | None = None
    release_date: str | None = None
    url: str | None = None
    uri: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProviderTrackOut(BaseModel):
    provider_track_id: str
    title: str
    artist: str | None = None
    artwork_url: str | None = None
    url: str | None = None
    uri: str | None = None
    duration_ms: int | None = None
    explicit: bool = False
    album_id: str | None = None
    artist_id: str | None = None

    model_config = ConfigDict(from_attributes=True)


class PlaybackStateOut(BaseModel):
    is_playing: bool
    progress_ms: int | None = None
    device: DeviceOut | None = None
    track: ProviderTrackOut | None = None

    model_config = ConfigDict(from_attributes=True)


class SearchResultsOut(BaseModel):
    tracks: list[ProviderTrackOut]
    albums: list[ProviderAlbumOut]
    artists: list[ProviderArtistOut]

    model_config = ConfigDict(from_attributes=True)


class ProviderPlaylistOut(BaseModel):
    provider: str
    provider_playlist_id: str
    title: str
    description: str | None = None
    url: str | None = None
    track_count: int | None = None
    is_public: bool | None = None

    model_config = ConfigDict(from_attributes=True)


class HistoryExportOut(BaseModel):
    message: str
    exported_tracks: int
    playlist: ProviderPlaylistOut
