from app.schemas.user import UserCreate, UserUpdate
from app.schemas.catalog import AlbumOut, ArtistOut, TrackOut
from app.schemas.event import (
    AddSongRequest,
    CurrentlyPlayingOut,
    EventOut,
    HistoryOut,
    MessageOut,
    PlaylistOut,
    PlaylistViewOut,
    QueueItemActionOut,
    QueueItemOut,
    ReorderRequest,
)
from app.schemas.provider import (
    DeviceOut,
    HistoryExportOut,
    PlaybackStateOut,
    ProviderAlbumOut,
    ProviderArtistOut,
    ProviderPlaylistOut,
    ProviderTrackOut,
    SearchResultsOut,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "AlbumOut",
    "ArtistOut",
    "TrackOut",
    "AddSongRequest",
    "CurrentlyPlayingOut",
    "EventOut",
    "HistoryOut",
    "MessageOut",
    "PlaylistOut",
    "PlaylistViewOut",
    "QueueItemActionOut",
    "QueueItemOut",
    "ReorderRequest",
    "DeviceOut",
    "HistoryExportOut",
    "PlaybackStateOut",
    "ProviderAlbumOut",
    "ProviderArtistOut",
    "ProviderPlaylistOut",
    "ProviderTrackOut",
    "SearchResultsOut",
]
