"""Shared helpers for per-host event routes."""

from typing import NoReturn

import httpx
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.crud.event import event_crud
from app.crud.playlist import playlist_crud
from app.crud.user import user_crud
from app.db.session import get_db
from app.models.event import Event
from app.models.playlist import Playlist
from app.models.user import User
from app.services.music_providers import (
    MusicProviderClient,
    ProviderAPIError,
    ProviderAuthError,
    get_provider_client_for_user,
)
from app.services.queue_manager import (
    EmptyQueueError,
    InvalidIndexError,
    NoNextSongError,
    NotFoundError,
    QueueError,
    QueueManager,
    StoreTransactionFailedError,
    VendorCallFailedError,
)

PROVIDER = "spotify"
PROVIDER_ERRORS = (ProviderAuthError, ProviderAPIError, httpx.HTTPError)


def get_queue_manager(db: Session = Depends(get_db)) -> QueueManager:
    return QueueManager(db)


def get_host_or_404(db: Session, name: str) -> User:
    host = user_crud.get_by_name(db, name)
    if not host:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Host not found")
    return host


def get_event_or_404(db: Session, host: User) -> Event:
    event = event_crud.get_active_for_host(db, host.id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found for this host")
    return event


def get_playlist_or_404(db: Session, event: Event) -> Playlist:
    playlist = playlist_crud.get(db, event.playlist_id)
    if not playlist:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Playlist not found for this host")
    return playlist


def resolve_host_playlist(db: Session, name: str) -> tuple[User, Event, Playlist]:
    """Resolve host -> active event -> playlist, failing on the first missing link."""
    host = get_host_or_404(db, name)
    event = get_event_or_404(db, host)
    playlist = get_playlist_or_404(db, event)
    return host, event, playlist


def get_host_client(db: Session, host: User) -> MusicProviderClient:
    if not host.access_token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing provider access token",
        )
    try:
        return get_provider_client_for_user(PROVIDER, host, db=db)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def get_host_client_by_name(db: Session, name: str) -> MusicProviderClient:
    return get_host_client(db, get_host_or_404(db, name))


def raise_provider_error(exc: Exception) -> NoReturn:
    """Translate a provider failure into an HTTP error."""
    if isinstance(exc, ProviderAuthError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Spotify authorization expired or invalid",
        ) from exc
    if isinstance(exc, ProviderAPIError) and exc.status_code in {400, 404}:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    if isinstance(exc, httpx.HTTPError):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Spotify request failed") from exc
    raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


def raise_queue_error(exc: QueueError) -> NoReturn:
    """Translate a queue manager failure into an HTTP error."""
    if isinstance(exc, (NotFoundError, EmptyQueueError, NoNextSongError)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, InvalidIndexError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(exc, VendorCallFailedError):
        if exc.auth_failed:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Spotify authorization expired or invalid",
            ) from exc
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Spotify playback request failed") from exc
    if isinstance(exc, StoreTransactionFailedError):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not update the queue",
        ) from exc
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
