"""Artist, album and track cache CRUD helpers.

Rows are keyed by the provider id and refreshed from provider metadata on every
upsert, so the cache follows whatever Spotify last returned.
"""
from typing import Optional
from sqlalchemy.orm import Session

from app.crud.base import BaseCRUD
from app.models.album import Album
from app.models.artist import Artist
from app.models.track import Track
from app.services.music_providers.base import ProviderAlbum, ProviderArtist, ProviderTrack


class ArtistCRUD(BaseCRUD[Artist, dict, dict]):
    def get_by_provider_id(self, db: Session, provider_artist_id: str) -> Optional[Artist]:
        """Return a cached artist by Spotify id."""
        return db.query(Artist).filter(Artist.provider_artist_id == provider_artist_id).first()

    def upsert_from_provider(self, db: Session, artist: ProviderArtist) -> Artist:
        """Create or refresh the cached artist."""
        data = {
            "provider_artist_id": artist.provider_artist_id,
            "name": artist.name,
            "url": artist.url,
            "href": artist.href,
            "artist_type": artist.artist_type,
            "uri": artist.uri,
        }
        existing = self.get_by_provider_id(db, artist.provider_artist_id)
        if existing:
            return self.update(db, existing, data)
        return self.create(db, data)


class AlbumCRUD(BaseCRUD[Album, dict, dict]):
    def get_by_provider_id(self, db: Session, provider_album_id: str) -> Optional[Album]:
        """Return a cached album by Spotify id."""
        return db.query(Album).filter(Album.provider_album_id == provider_album_id).first()

    def upsert_from_provider(self, db: Session, album: ProviderAlbum, artist_id: int | None) -> Album:
        """Create or refresh the cached album."""
        data = {
            "provider_album_id": album.provider_album_id,
            "name": album.name,
            "album_type": album.album_type,
            "url": album.url,
            "href": album.href,
            "image_url": album.image_url,
            "release_date": album.release_date,
            "release_date_precision": album.release_date_precision,
            "total_tracks": album.total_tracks,
            "uri": album.uri,
            "artist_id": artist_id,
        }
        existing = self.get_by_provider_id(db, album.provider_album_id)
        if existing:
            return self.update(db, existing, data)
        return self.create(db, data)


class TrackCRUD(BaseCRUD[Track, dict, dict]):
    def get_by_provider_id(self, db: Session, provider_track_id: str) -> Optional[Track]:
        """Return a cached track by Spotify id."""
        return db.query(Track).filter(Track.provider_track_id == provider_track_id).first()

    def upsert_from_provider(
        self,
        db: Session,
        track: ProviderTrack,
        album_id: int | None,
        artist_id: int | None,
    ) -> Track:
        """Create or refresh the cached track."""
        data = {
            "provider_track_id": track.provider_track_id,
            "name": track.title,
            "uri": track.uri or f"spotify:track:{track.provider_track_id}",
            "url": track.url,
            "href": track.href,
            "duration_ms": track.duration_ms,
            "explicit": track.explicit,
            "disc_number": track.disc_number,
            "track_number": track.track_number,
            "isrc": track.isrc,
            "popularity": track.popularity,
            "preview_url": track.preview_url,
            "is_local": track.is_local,
            "track_type": track.track_type,
            "album_id": album_id,
            "artist_id": artist_id,
        }
        existing = self.get_by_provider_id(db, track.provider_track_id)
        if existing:
            return self.update(db, existing, data)
        return self.create(db, data)


artist_crud = ArtistCRUD(Artist)
album_crud = AlbumCRUD(Album)
track_crud = TrackCRUD(Track)
