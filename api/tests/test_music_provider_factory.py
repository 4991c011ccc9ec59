import pytest

from app.services.music_providers.factory import get_music_provider
from app.services.music_providers.spotify import SpotifyProvider


def test_get_music_provider_returns_spotify_provider():
    provider = get_music_provider("Spotify", "token")
    assert isinstance(provider, SpotifyProvider)
    assert provider.access_token == "token"


@pytest.mark.parametrize("name", ["soundcloud", "unknown"])
def test_get_music_provider_rejects_other_providers(name):
    with pytest.raises(ValueError):
        get_music_provider(name, "token")
