"""Event queue routes: listing, ordering, adding, removing and advancing."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.v1.routes.events.common import (
    PROVIDER_ERRORS,
    get_host_client,
    get_host_or_404,
    get_queue_manager,
    raise_provider_error,
    raise_queue_error,
    resolve_host_playlist,
)
from app.crud.catalog import album_crud, artist_crud, track_crud
from app.crud.event import event_crud
from app.db.session import get_db
from app.models.event import Event
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
from app.schemas.provider import HistoryExportOut, ProviderPlaylistOut
from app.services.queue_manager import QueueError, QueueManager

logger = logging.getLogger(__name__)

router = APIRouter()


def _currently_playing(event: Event) -> CurrentlyPlayingOut | None:
    track = event.playing_track
    if not track:
        return None
    artist = track.artist or (track.album.artist if track.album else None)
    return CurrentlyPlayingOut(
        name=track.name,
        album_name=track.album.name if track.album else None,
        artist_name=artist.name if artist else None,
    )


@router.get("/{name}", response_model=list[EventOut])
def list_host_events(name: str, db: Session = Depends(get_db)):
    """List every event of a host with its playlist and queue."""
    host = get_host_or_404(db, name)
    events = event_crud.list_for_host(db, host.id)
    if not events:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No events found for this host")
    return events


@router.get("/{name}/playlist", response_model=PlaylistViewOut)
def get_event_playlist(
    name: str,
    db: Session = Depends(get_db),
    queue_manager: QueueManager = Depends(get_queue_manager),
):
    """Return the pending queue and the track currently playing."""
    _host, event, playlist = resolve_host_playlist(db, name)
    pending = queue_manager.list_pending(playlist.id)
    return PlaylistViewOut(
        playlist=PlaylistOut(
            id=playlist.id,
            name=playlist.name,
            provider_playlist_id=playlist.provider_playlist_id,
            queue=[QueueItemOut.model_validate(item) for item in pending],
        ),
        currently_playing=_currently_playing(event),
    )


@router.get("/{name}/history", response_model=HistoryOut)
def get_event_history(
    name: str,
    db: Session = Depends(get_db),
    queue_manager: QueueManager = Depends(get_queue_manager),
):
    """Return played entries, most recently played first."""
    _host, _event, playlist = resolve_host_playlist(db, name)
    history = queue_manager.list_history(playlist.id)
    return HistoryOut(history=[QueueItemOut.model_validate(item) for item in history])


@router.post("/{name}/playlist/reorder", response_model=MessageOut)
def reorder_event_playlist(
    name: str,
    payload: ReorderRequest,
    db: Session = Depends(get_db),
    queue_manager: QueueManager = Depends(get_queue_manager),
):
    """Move one pending entry from one index to another."""
    _host, _event, playlist = resolve_host_playlist(db, name)
    try:
        queue_manager.reorder(playlist.id, payload.from_index, payload.to_index)
    except QueueError as exc:
        raise_queue_error(exc)
    return MessageOut(message="Playlist reordered successfully.")


@router.post("/{name}/songs", response_model=QueueItemActionOut)
async def add_song(
    name: str,
    payload: AddSongRequest,
    db: Session = Depends(get_db),
    queue_manager: QueueManager = Depends(get_queue_manager),
):
    """Look a track up on Spotify, cache its metadata and queue it."""
    host, _event, playlist = resolve_host_playlist(db, name)
    client = get_host_client(db, host)
    try:
        provider_track = await client.get_track(payload.song_id)
        provider_artist = await client.get_artist(provider_track.artist_id) if provider_track.artist_id else None
        provider_album = await client.get_album(provider_track.album_id) if provider_track.album_id else None
    except PROVIDER_ERRORS as exc:
        raise_provider_error(exc)

    artist = artist_crud.upsert_from_provider(db, provider_artist) if provider_artist else None
    artist_id = artist.id if artist else None
    album = album_crud.upsert_from_provider(db, provider_album, artist_id) if provider_album else None
    track = track_crud.upsert_from_provider(db, provider_track, album.id if album else None, artist_id)

    try:
        item = queue_manager.append(playlist.id, track)
    except QueueError as exc:
        raise_queue_error(exc)
    return QueueItemActionOut(message="Song added successfully", queue_item=QueueItemOut.model_validate(item))


@router.delete("/{name}/songs/{queue_item_id}", response_model=MessageOut)
def remove_song(
    name: str,
    queue_item_id: int,
    db: Session = Depends(get_db),
    queue_manager: QueueManager = Depends(get_queue_manager),
):
    """Remove a queue entry from the host's playlist."""
    _host, _event, playlist = resolve_host_playlist(db, name)
    try:
        queue_manager.remove(playlist.id, queue_item_id)
    except QueueError as exc:
        raise_queue_error(exc)
    return MessageOut(message="Queue deleted successfully")


@router.get("/{name}/start", response_model=QueueItemActionOut)
async def start_queue(
    name: str,
    device_id: str = Query(..., alias="deviceId", min_length=1),
    db: Session = Depends(get_db),
    queue_manager: QueueManager = Depends(get_queue_manager),
):
    """Transfer playback to a device and play the head of the queue."""
    host, _event, playlist = resolve_host_playlist(db, name)
    client = get_host_client(db, host)
    try:
        item = await queue_manager.advance_to_start(playlist.id, device_id, client)
    except QueueError as exc:
        raise_queue_error(exc)
    return QueueItemActionOut(
        message="Playing first track in queue successfully",
        queue_item=QueueItemOut.model_validate(item),
    )


@router.get("/{name}/next", response_model=QueueItemActionOut)
async def play_next(
    name: str,
    db: Session = Depends(get_db),
    queue_manager: QueueManager = Depends(get_queue_manager),
):
    """Play the next pending entry on the active device."""
    host, _event, playlist = resolve_host_playlist(db, name)
    client = get_host_client(db, host)
    try:
        item = await queue_manager.advance_next(playlist.id, client)
    except QueueError as exc:
        raise_queue_error(exc)
    return QueueItemActionOut(
        message="Playing next track in queue successfully",
        queue_item=QueueItemOut.model_validate(item),
    )


@router.post("/{name}/export", response_model=HistoryExportOut)
async def export_history(
    name: str,
    db: Session = Depends(get_db),
    queue_manager: QueueManager = Depends(get_queue_manager),
):
    """Copy the played tracks into a new private Spotify playlist."""
    host, _event, playlist = resolve_host_playlist(db, name)
    track_uris = queue_manager.history_track_uris(playlist.id)
    client = get_host_client(db, host)
    try:
        provider_playlist = await client.create_playlist(title=f"History for {name}", is_public=False)
        await client.add_tracks(provider_playlist.provider_playlist_id, track_uris)
    except PROVIDER_ERRORS as exc:
        logger.error("History export failed for host %s: %s", name, exc)
        raise_provider_error(exc)
    return HistoryExportOut(
        message="Successfully exported history to Spotify playlist",
        exported_tracks=len(track_uris),
        playlist=ProviderPlaylistOut.model_validate(provider_playlist),
    )
