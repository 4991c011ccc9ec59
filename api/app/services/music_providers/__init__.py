from app.services.music_providers.base import (
    MusicProviderClient,
    ProviderAlbum,
    ProviderArtist,
    ProviderDevice,
    ProviderPlaybackState,
    ProviderPlaylist,
    ProviderSearchResults,
    ProviderTrack,
    ProviderAuthError,
    ProviderAPIError,
)
from app.services.music_providers.factory import get_music_provider
from app.services.music_providers.session import get_provider_client_for_user

__all__ = [
    "MusicProviderClient",
    "ProviderAlbum",
    "ProviderArtist",
    "ProviderDevice",
    "ProviderPlaybackState",
    "ProviderPlaylist",
    "ProviderSearchResults",
    "ProviderTrack",
    "ProviderAuthError",
    "ProviderAPIError",
    "get_music_provider",
    "get_provider_client_for_user",
]
