"""Base classes for music provider integrations."""

from dataclasses import dataclass, field
from typing import Sequence


class ProviderAuthError(Exception):
    """Raised when provider auth is missing or expired."""


class ProviderAPIError(Exception):
    """Raised when provider API returns a non-auth error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class ProviderPlaylist:
    provider: str
    provider_playlist_id: str
    title: str
    description: str | None = None
    image_url: str | None = None
    url: str | None = None
    track_count: int | None = None
    is_public: bool | None = None


@dataclass
class ProviderArtist:
    provider_artist_id: str
    name: str
    url: str | None = None
    href: str | None = None
    artist_type: str | None = None
    uri: str | None = None


@dataclass
class ProviderAlbum:
    provider_album_id: str
    name: str
    album_type: str | None = None
    url: str | None = None
    href: str | None = None
    image_url: str | None = None
    release_date: str | None = None
    release_date_precision: str | None = None
    total_tracks: int | None = None
    uri: str | None = None
    artist_id: str | None = None


@dataclass
class ProviderTrack:
    provider_track_id: str
    title: str
    artist: str | None = None
    artwork_url: str | None = None
    url: str | None = None
    uri: str | None = None
    href: str | None = None
    duration_ms: int | None = None
    explicit: bool = False
    disc_number: int | None = None
    track_number: int | None = None
    isrc: str | None = None
    popularity: int | None = None
    preview_url: str | None = None
    is_local: bool = False
    track_type: str | None = None
    album_id: str | None = None
    artist_id: str | None = None


@dataclass
class ProviderDevice:
    device_id: str
    name: str
    device_type: str | None = None
    is_active: bool = False
    volume_percent: int | None = None


@dataclass
class ProviderPlaybackState:
    is_playing: bool
    progress_ms: int | None = None
    device: ProviderDevice | None = None
    track: ProviderTrack | None = None


@dataclass
class ProviderSearchResults:
    tracks: list[ProviderTrack] = field(default_factory=list)
    albums: list[ProviderAlbum] = field(default_factory=list)
    artists: list[ProviderArtist] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.tracks or self.albums or self.artists)


class MusicProviderClient:
    """Abstract provider client interface."""

    provider: str

    def __init__(self, access_token: str):
        self.access_token = access_token

    async def create_playlist(
        self,
        title: str,
        description: str | None = None,
        is_public: bool | None = None,
    ) -> ProviderPlaylist:
        raise NotImplementedError

    async def add_tracks(self, provider_playlist_id: str, track_ids: Sequence[str]) -> None:
        raise NotImplementedError

    async def search(
        self,
        query: str,
        types: Sequence[str] = ("track", "album", "artist"),
        limit: int = 20,
    ) -> ProviderSearchResults:
        """Search the catalog by free-text query."""
        raise NotImplementedError

    async def get_track(self, provider_track_id: str) -> ProviderTrack:
        raise NotImplementedError

    async def get_album(self, provider_album_id: str) -> ProviderAlbum:
        raise NotImplementedError

    async def get_artist(self, provider_artist_id: str) -> ProviderArtist:
        raise NotImplementedError

    async def list_devices(self) -> Sequence[ProviderDevice]:
        """Return the playback devices visible to the account."""
        raise NotImplementedError

    async def transfer_playback(self, device_id: str, play: bool = False) -> None:
        """Move the active playback session to another device."""
        raise NotImplementedError

    async def play(self, track_uris: Sequence[str] | None = None, device_id: str | None = None) -> None:
        """Start the given tracks, or resume the current context when none are given."""
        raise NotImplementedError

    async def pause(self) -> None:
        raise NotImplementedError

    async def get_playback_state(self) -> ProviderPlaybackState | None:
        """Return the current playback state, or None when nothing is active."""
        raise NotImplementedError
