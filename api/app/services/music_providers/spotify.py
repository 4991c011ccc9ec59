"""Spotify provider integration."""

from __future__ import annotations

import logging
from typing import Any, Sequence
from urllib.parse import urlparse

import httpx

from app.config.settings import settings
from app.services.music_providers.base import (
    MusicProviderClient,
    ProviderAlbum,
    ProviderAPIError,
    ProviderArtist,
    ProviderAuthError,
    ProviderDevice,
    ProviderPlaybackState,
    ProviderPlaylist,
    ProviderSearchResults,
    ProviderTrack,
)

logger = logging.getLogger(__name__)

ADD_TRACKS_CHUNK_SIZE = 100
SEARCH_TYPES = ("track", "album", "artist")


class SpotifyProvider(MusicProviderClient):
    provider = "spotify"

    def __init__(self, access_token: str):
        super().__init__(access_token)
        self.base_url = settings.SPOTIFY_API_BASE_URL or "https://api.spotify.com/v1"
        self.timeout = settings.PROVIDER_TIMEOUT_SECONDS

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)

    @staticmethod
    def _first_image_url(images_payload: Any) -> str | None:
        if not isinstance(images_payload, list):
            return None
        for item in images_payload:
            if not isinstance(item, dict):
                continue
            url = item.get("url")
            if isinstance(url, str) and url.strip():
                return url
        return None

    @staticmethod
    def _spotify_url(payload: dict) -> str | None:
        external_urls = payload.get("external_urls")
        url = external_urls.get("spotify") if isinstance(external_urls, dict) else None
        return url if isinstance(url, str) else None

    @staticmethod
    def _optional_int(value: Any) -> int | None:
        if isinstance(value, bool):
            return None
        return value if isinstance(value, int) else None

    @staticmethod
    def _optional_str(value: Any) -> str | None:
        return value if isinstance(value, str) and value else None

    @staticmethod
    def _extract_provider_message(payload: Any) -> str | None:
        if not isinstance(payload, dict):
            return None
        error_payload = payload.get("error")
        if isinstance(error_payload, dict):
            message = error_payload.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        elif isinstance(error_payload, str) and error_payload.strip():
            return error_payload.strip()
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
        return None

    @staticmethod
    def _extract_playlist_track_count(payload: Any) -> int | None:
        if not isinstance(payload, dict):
            return None
        # Spotify has returned playlist totals in `tracks.total` historically
        # and now returns `items.total` in current payloads.
        for key in ("tracks", "items"):
            container = payload.get(key)
            if not isinstance(container, dict):
                continue
            raw_total = container.get("total")
            if isinstance(raw_total, int):
                return raw_total
        return None

    def _raise_for_status(self, response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            request = exc.request
            request_method = request.method if request is not None else "UNKNOWN"
            request_path = request.url.path if request is not None else "unknown"
            provider_message: str | None = None
            try:
                payload = exc.response.json()
                provider_message = self._extract_provider_message(payload)
            except Exception:
                provider_message = None

            if status_code in {401, 403}:
                logger.warning(
                    "Spotify auth error on %s %s (status=%s, message=%s)",
                    request_method,
                    request_path,
                    status_code,
                    provider_message or "-",
                )
                raise ProviderAuthError("Spotify authorization expired or invalid") from exc

            logger.error(
                "Spotify API error on %s %s (status=%s, message=%s)",
                request_method,
                request_path,
                status_code,
                provider_message or "-",
            )
            detail_suffix = f": {provider_message}" if provider_message else ""
            raise ProviderAPIError(
                f"Spotify API error ({status_code}){detail_suffix}",
                status_code=status_code,
            ) from exc

    @staticmethod
    def _clean_id(value: str) -> str | None:
        cleaned = value.strip()
        return cleaned or None

    @classmethod
    def _extract_id_from_open_url(cls, url: str, resource: str) -> str | None:
        try:
            parsed = urlparse(url)
        except Exception:
            return None
        host = (parsed.netloc or "").lower()
        if "spotify.com" not in host:
            return None
        segments = [segment for segment in parsed.path.split("/") if segment]
        if not segments:
            return None
        if segments[0].lower().startswith("intl-") and len(segments) > 1:
            segments = segments[1:]
        for index, segment in enumerate(segments):
            if segment.lower() != resource:
                continue
            if index + 1 >= len(segments):
                return None
            return cls._clean_id(segments[index + 1])
        return None

    @classmethod
    def _normalize_resource_id(cls, value: str, resource: str) -> str | None:
        raw_value = value.strip()
        if not raw_value:
            return None
        prefix = f"spotify:{resource}:"
        if raw_value.lower().startswith(prefix):
            return cls._clean_id(raw_value.split(":", 2)[-1])
        if raw_value.startswith("http://") or raw_value.startswith("https://"):
            return cls._extract_id_from_open_url(raw_value, resource)
        if "open.spotify.com/" in raw_value.lower():
            return cls._extract_id_from_open_url(f"https://{raw_value}", resource)
        return cls._clean_id(raw_value)

    @classmethod
    def _to_track_uri(cls, value: str) -> str | None:
        normalized_track_id = cls._normalize_resource_id(value, "track")
        if not normalized_track_id:
            return None
        return f"spotify:track:{normalized_track_id}"

    @classmethod
    def _require_id(cls, value: str, resource: str) -> str:
        resource_id = cls._normalize_resource_id(value, resource)
        if not resource_id:
            raise ProviderAPIError(f"{resource.capitalize()} id is required", status_code=400)
        return resource_id

    def _to_provider_playlist(self, payload: Any) -> ProviderPlaylist | None:
        if not isinstance(payload, dict):
            return None
        playlist_id = self._clean_id(str(payload.get("id") or ""))
        if not playlist_id:
            return None
        is_public = payload.get("public") if isinstance(payload.get("public"), bool) else None
        return ProviderPlaylist(
            provider=self.provider,
            provider_playlist_id=playlist_id,
            title=payload.get("name") or "Untitled",
            description=payload.get("description"),
            image_url=self._first_image_url(payload.get("images")),
            url=self._spotify_url(payload),
            track_count=self._extract_playlist_track_count(payload),
            is_public=is_public,
        )

    def _to_provider_artist(self, payload: Any) -> ProviderArtist | None:
        if not isinstance(payload, dict):
            return None
        artist_id = self._clean_id(str(payload.get("id") or ""))
        if not artist_id:
            return None
        return ProviderArtist(
            provider_artist_id=artist_id,
            name=payload.get("name") or "Unknown artist",
            url=self._spotify_url(payload),
            href=self._optional_str(payload.get("href")),
            artist_type=self._optional_str(payload.get("type")),
            uri=self._optional_str(payload.get("uri")),
        )

    def _first_artist_id(self, payload: dict) -> str | None:
        artists_payload = payload.get("artists")
        if not isinstance(artists_payload, list):
            return None
        for artist_payload in artists_payload:
            mapped = self._to_provider_artist(artist_payload)
            if mapped:
                return mapped.provider_artist_id
        return None

    def _to_provider_album(self, payload: Any) -> ProviderAlbum | None:
        if not isinstance(payload, dict):
            return None
        album_id = self._clean_id(str(payload.get("id") or ""))
        if not album_id:
            return None
        return ProviderAlbum(
            provider_album_id=album_id,
            name=payload.get("name") or "Untitled",
            album_type=self._optional_str(payload.get("album_type")),
            url=self._spotify_url(payload),
            href=self._optional_str(payload.get("href")),
            image_url=self._first_image_url(payload.get("images")),
            release_date=self._optional_str(payload.get("release_date")),
            release_date_precision=self._optional_str(payload.get("release_date_precision")),
            total_tracks=self._optional_int(payload.get("total_tracks")),
            uri=self._optional_str(payload.get("uri")),
            artist_id=self._first_artist_id(payload),
        )

    def _to_provider_track(self, payload: Any) -> ProviderTrack | None:
        if not isinstance(payload, dict):
            return None
        track_id = self._clean_id(str(payload.get("id") or ""))
        if not track_id:
            return None
        artists_payload = payload.get("artists")
        artist_names: list[str] = []
        if isinstance(artists_payload, list):
            for artist_payload in artists_payload:
                if not isinstance(artist_payload, dict):
                    continue
                name = artist_payload.get("name")
                if isinstance(name, str) and name.strip():
                    artist_names.append(name.strip())
        album_payload = payload.get("album")
        artwork_url = None
        album_id = None
        if isinstance(album_payload, dict):
            artwork_url = self._first_image_url(album_payload.get("images"))
            album_id = self._clean_id(str(album_payload.get("id") or ""))
        external_ids = payload.get("external_ids")
        isrc = external_ids.get("isrc") if isinstance(external_ids, dict) else None
        return ProviderTrack(
            provider_track_id=track_id,
            title=payload.get("name") or "Untitled",
            artist=", ".join(artist_names) if artist_names else None,
            artwork_url=artwork_url,
            url=self._spotify_url(payload),
            uri=self._optional_str(payload.get("uri")) or f"spotify:track:{track_id}",
            href=self._optional_str(payload.get("href")),
            duration_ms=self._optional_int(payload.get("duration_ms")),
            explicit=bool(payload.get("explicit")),
            disc_number=self._optional_int(payload.get("disc_number")),
            track_number=self._optional_int(payload.get("track_number")),
            isrc=self._optional_str(isrc),
            popularity=self._optional_int(payload.get("popularity")),
            preview_url=self._optional_str(payload.get("preview_url")),
            is_local=bool(payload.get("is_local")),
            track_type=self._optional_str(payload.get("type")),
            album_id=album_id,
            artist_id=self._first_artist_id(payload),
        )

    def _to_provider_device(self, payload: Any) -> ProviderDevice | None:
        if not isinstance(payload, dict):
            return None
        device_id = self._clean_id(str(payload.get("id") or ""))
        if not device_id:
            return None
        return ProviderDevice(
            device_id=device_id,
            name=payload.get("name") or "Unknown device",
            device_type=self._optional_str(payload.get("type")),
            is_active=bool(payload.get("is_active")),
            volume_percent=self._optional_int(payload.get("volume_percent")),
        )

    async def _fetch_current_user_id(self, client: httpx.AsyncClient) -> str:
        response = await client.get(
            "/me",
            headers=self._headers(),
        )
        self._raise_for_status(response)
        payload = response.json()
        if not isinstance(payload, dict):
            raise ProviderAPIError("Unable to fetch Spotify user profile", status_code=502)
        user_id = self._clean_id(str(payload.get("id") or ""))
        if not user_id:
            raise ProviderAPIError("Unable to fetch Spotify user profile", status_code=502)
        return user_id

    async def create_playlist(
        self,
        title: str,
        description: str | None = None,
        is_public: bool | None = None,
    ) -> ProviderPlaylist:
        async with self._client() as client:
            user_id = await self._fetch_current_user_id(client)
            response = await client.post(
                f"/users/{user_id}/playlists",
                headers=self._headers(),
                json={
                    "name": title,
                    "description": description or "",
                    "public": bool(is_public),
                },
            )
            self._raise_for_status(response)
            payload = response.json()
        mapped = self._to_provider_playlist(payload)
        if not mapped:
            raise ProviderAPIError("Unable to create playlist", status_code=502)
        return ProviderPlaylist(
            provider=mapped.provider,
            provider_playlist_id=mapped.provider_playlist_id,
            title=mapped.title or title,
            description=mapped.description if mapped.description is not None else description,
            image_url=mapped.image_url,
            url=mapped.url,
            track_count=mapped.track_count,
            is_public=mapped.is_public,
        )

    async def add_tracks(self, provider_playlist_id: str, track_ids: Sequence[str]) -> None:
        playlist_id = self._require_id(provider_playlist_id, "playlist")
        # Repeats are kept: a track played twice appears twice.
        normalized_uris = [uri for uri in (self._to_track_uri(str(track_id)) for track_id in track_ids) if uri]
        if not normalized_uris:
            return
        async with self._client() as client:
            for start in range(0, len(normalized_uris), ADD_TRACKS_CHUNK_SIZE):
                response = await client.post(
                    f"/playlists/{playlist_id}/items",
                    headers=self._headers(),
                    json={"uris": normalized_uris[start:start + ADD_TRACKS_CHUNK_SIZE]},
                )
                self._raise_for_status(response)

    async def search(
        self,
        query: str,
        types: Sequence[str] = SEARCH_TYPES,
        limit: int = 20,
    ) -> ProviderSearchResults:
        search_query = query.strip()
        if not search_query:
            return ProviderSearchResults()
        search_types = [search_type for search_type in types if search_type in SEARCH_TYPES]
        if not search_types:
            raise ProviderAPIError("Unsupported search type", status_code=400)
        safe_limit = max(1, min(limit, 50))
        async with self._client() as client:
            response = await client.get(
                "/search",
                headers=self._headers(),
                params={
                    "q": search_query,
                    "type": ",".join(search_types),
                    "limit": safe_limit,
                },
            )
            self._raise_for_status(response)
            payload = response.json()
        results = ProviderSearchResults()
        if not isinstance(payload, dict):
            return results
        mappers = {
            "tracks": (self._to_provider_track, results.tracks),
            "albums": (self._to_provider_album, results.albums),
            "artists": (self._to_provider_artist, results.artists),
        }
        for key, (mapper, bucket) in mappers.items():
            container = payload.get(key)
            if not isinstance(container, dict):
                continue
            items = container.get("items")
            if not isinstance(items, list):
                continue
            for item in items:
                mapped = mapper(item)
                if mapped:
                    bucket.append(mapped)
        return results

    async def get_track(self, provider_track_id: str) -> ProviderTrack:
        track_id = self._require_id(provider_track_id, "track")
        async with self._client() as client:
            response = await client.get(
                f"/tracks/{track_id}",
                headers=self._headers(),
            )
            self._raise_for_status(response)
            payload = response.json()
        mapped = self._to_provider_track(payload)
        if not mapped:
            raise ProviderAPIError("Track not found", status_code=404)
        return mapped

    async def get_album(self, provider_album_id: str) -> ProviderAlbum:
        album_id = self._require_id(provider_album_id, "album")
        async with self._client() as client:
            response = await client.get(
                f"/albums/{album_id}",
                headers=self._headers(),
            )
            self._raise_for_status(response)
            payload = response.json()
        mapped = self._to_provider_album(payload)
        if not mapped:
            raise ProviderAPIError("Album not found", status_code=404)
        return mapped

    async def get_artist(self, provider_artist_id: str) -> ProviderArtist:
        artist_id = self._require_id(provider_artist_id, "artist")
        async with self._client() as client:
            response = await client.get(
                f"/artists/{artist_id}",
                headers=self._headers(),
            )
            self._raise_for_status(response)
            payload = response.json()
        mapped = self._to_provider_artist(payload)
        if not mapped:
            raise ProviderAPIError("Artist not found", status_code=404)
        return mapped

    async def list_devices(self) -> Sequence[ProviderDevice]:
        async with self._client() as client:
            response = await client.get(
                "/me/player/devices",
                headers=self._headers(),
            )
            self._raise_for_status(response)
            payload = response.json()
        if not isinstance(payload, dict):
            return []
        items = payload.get("devices")
        if not isinstance(items, list):
            return []
        devices: list[ProviderDevice] = []
        for item in items:
            mapped = self._to_provider_device(item)
            if mapped:
                devices.append(mapped)
        return devices

    async def transfer_playback(self, device_id: str, play: bool = False) -> None:
        target = self._clean_id(device_id or "")
        if not target:
            raise ProviderAPIError("Device id is required", status_code=400)
        async with self._client() as client:
            response = await client.put(
                "/me/player",
                headers=self._headers(),
                json={"device_ids": [target], "play": play},
            )
            self._raise_for_status(response)

    async def play(self, track_uris: Sequence[str] | None = None, device_id: str | None = None) -> None:
        params = {"device_id": device_id} if device_id else None
        body: dict[str, list[str]] | None = None
        if track_uris:
            uris = [uri for uri in (self._to_track_uri(str(value)) for value in track_uris) if uri]
            if not uris:
                raise ProviderAPIError("No playable track URIs", status_code=400)
            body = {"uris": uris}
        async with self._client() as client:
            response = await client.put(
                "/me/player/play",
                headers=self._headers(),
                params=params,
                json=body,
            )
            self._raise_for_status(response)

    async def pause(self) -> None:
        async with self._client() as client:
            response = await client.put(
                "/me/player/pause",
                headers=self._headers(),
            )
            self._raise_for_status(response)

    async def get_playback_state(self) -> ProviderPlaybackState | None:
        async with self._client() as client:
            response = await client.get(
                "/me/player",
                headers=self._headers(),
            )
            self._raise_for_status(response)
            if response.status_code == 204 or not response.content:
                return None
            payload = response.json()
        if not isinstance(payload, dict):
            return None
        return ProviderPlaybackState(
            is_playing=bool(payload.get("is_playing")),
            progress_ms=self._optional_int(payload.get("progress_ms")),
            device=self._to_provider_device(payload.get("device")),
            track=self._to_provider_track(payload.get("item")),
        )
