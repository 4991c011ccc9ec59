"""Pass-through playback and catalog routes on the host's Spotify account."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.routes.events.common import PROVIDER_ERRORS, get_host_client_by_name, raise_provider_error
from app.db.session import get_db
from app.schemas.event import MessageOut
from app.schemas.provider import DeviceOut, PlaybackStateOut, ProviderTrackOut, SearchResultsOut

router = APIRouter()


@router.get("/{name}/devices", response_model=list[DeviceOut] | MessageOut)
async def list_devices(name: str, db: Session = Depends(get_db)):
    """List the host's Spotify devices."""
    client = get_host_client_by_name(db, name)
    try:
        devices = await client.list_devices()
    except PROVIDER_ERRORS as exc:
        raise_provider_error(exc)
    if not devices:
        return MessageOut(message="No devices found for the user")
    return [DeviceOut.model_validate(device) for device in devices]


@router.get("/{name}/pause", response_model=MessageOut)
async def pause_playback(name: str, db: Session = Depends(get_db)):
    client = get_host_client_by_name(db, name)
    try:
        await client.pause()
    except PROVIDER_ERRORS as exc:
        raise_provider_error(exc)
    return MessageOut(message="Playback paused successfully")


@router.get("/{name}/resume", response_model=MessageOut)
async def resume_playback(name: str, db: Session = Depends(get_db)):
    client = get_host_client_by_name(db, name)
    try:
        await client.play()
    except PROVIDER_ERRORS as exc:
        raise_provider_error(exc)
    return MessageOut(message="Playback resumed successfully")


@router.get("/{name}/now-playing", response_model=PlaybackStateOut | MessageOut)
async def now_playing(name: str, db: Session = Depends(get_db)):
    """Return the host's playback state while something is playing."""
    client = get_host_client_by_name(db, name)
    try:
        state = await client.get_playback_state()
    except PROVIDER_ERRORS as exc:
        raise_provider_error(exc)
    if not state or not state.is_playing:
        return MessageOut(message="User is not playing anything, or playback is paused.")
    return PlaybackStateOut.model_validate(state)


@router.get("/{name}/tracks/{track_id}", response_model=ProviderTrackOut)
async def get_track(name: str, track_id: str, db: Session = Depends(get_db)):
    client = get_host_client_by_name(db, name)
    try:
        track = await client.get_track(track_id)
    except PROVIDER_ERRORS as exc:
        raise_provider_error(exc)
    return ProviderTrackOut.model_validate(track)


@router.get("/{name}/search/{query}", response_model=SearchResultsOut)
async def search_catalog(name: str, query: str, db: Session = Depends(get_db)):
    """Search Spotify tracks, albums and artists."""
    client = get_host_client_by_name(db, name)
    try:
        results = await client.search(query, types=("track", "album", "artist"))
    except PROVIDER_ERRORS as exc:
        raise_provider_error(exc)
    if results.is_empty:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No results found with the given query.")
    return SearchResultsOut.model_validate(results)
