"""Queue ordering and playback-advance rules for event playlists.

A playlist's queue is rebuilt from the database on every call. Pending entries
have no ``played_at`` and play in ascending ``position`` order; the lowest one
is the head. Playing an entry stamps ``played_at`` and stores ``-abs(position)``,
so history keeps the magnitude of its old slot while ``played_at`` stays the
authoritative played flag (position 0 negates to itself).

Every mutation runs in one transaction that first locks the playlist row, so
concurrent appends, reorders and advances on the same playlist serialise.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Awaitable, Iterator, TypeVar

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.crud.event import event_crud
from app.crud.playlist import playlist_crud
from app.crud.queue_item import queue_item_crud
from app.models.playlist import Playlist
from app.models.queue_item import QueueItem
from app.models.track import Track
from app.services.music_providers.base import MusicProviderClient, ProviderAPIError, ProviderAuthError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueueError(Exception):
    """Base class for queue manager failures."""


class NotFoundError(QueueError):
    """Raised when a host, event, playlist, queue entry or track is missing."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class InvalidIndexError(QueueError):
    """Raised when a reorder index falls outside the pending queue."""


class EmptyQueueError(QueueError):
    """Raised when starting playback with nothing queued."""


class NoNextSongError(QueueError):
    """Raised when advancing past the last pending entry."""


class VendorCallFailedError(QueueError):
    """Raised when the playback provider rejects or fails a call."""

    def __init__(self, message: str, status_code: int | None = None, auth_failed: bool = False) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.auth_failed = auth_failed


class StoreTransactionFailedError(QueueError):
    """Raised when a queue transaction could not be committed."""


class QueueManager:
    """Queue operations scoped to one database session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self, action: str) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Queue transaction failed during %s: %s", action, exc)
            raise StoreTransactionFailedError(f"Could not {action}") from exc
        except Exception:
            self.db.rollback()
            raise

    def _lock_playlist(self, playlist_id: int) -> Playlist:
        playlist = playlist_crud.get_for_update(self.db, playlist_id)
        if not playlist:
            raise NotFoundError("Playlist")
        return playlist

    async def _call_provider(self, action: str, call: Awaitable[T]) -> T:
        try:
            return await call
        except ProviderAuthError as exc:
            raise VendorCallFailedError(str(exc), status_code=401, auth_failed=True) from exc
        except ProviderAPIError as exc:
            logger.warning("Provider call failed during %s: %s", action, exc)
            raise VendorCallFailedError(str(exc), status_code=exc.status_code) from exc
        except httpx.HTTPError as exc:
            logger.warning("Provider request failed during %s: %s", action, exc)
            raise VendorCallFailedError(f"Spotify request failed during {action}") from exc

    def _mark_played(self, item: QueueItem, playlist_id: int) -> None:
        item.position = -abs(item.position)
        item.played_at = datetime.now(timezone.utc)
        event = event_crud.get_by_playlist_id(self.db, playlist_id)
        if event:
            event.playing_track_id = item.track_id

    def list_pending(self, playlist_id: int) -> list[QueueItem]:
        return queue_item_crud.list_pending(self.db, playlist_id)

    def list_history(self, playlist_id: int) -> list[QueueItem]:
        return queue_item_crud.list_history(self.db, playlist_id)

    def history_track_uris(self, playlist_id: int) -> list[str]:
        """Return track URIs of played entries in the order they were played."""
        return [item.track.uri for item in reversed(self.list_history(playlist_id))]

    def append(self, playlist_id: int, track: Track) -> QueueItem:
        """Queue a cached track at the tail of the playlist."""
        with self._transaction("append to queue"):
            self._lock_playlist(playlist_id)
            current_max = queue_item_crud.max_position(self.db, playlist_id)
            position = 0 if current_max is None else max(0, current_max + 1)
            item = queue_item_crud.create(
                self.db,
                {
                    "playlist_id": playlist_id,
                    "track_id": track.id,
                    "position": position,
                },
                commit=False,
            )
            event = event_crud.get_by_playlist_id(self.db, playlist_id)
            if event:
                event.last_queue_item_added = datetime.now(timezone.utc)
        logger.info("Queued track %s on playlist %s at position %s", track.provider_track_id, playlist_id, position)
        return item

    def reorder(self, playlist_id: int, from_index: int, to_index: int) -> list[QueueItem]:
        """Move one pending entry and renumber the pending queue 0..n-1.

        History entries never take part in indexing and keep their positions.
        """
        with self._transaction("reorder queue"):
            self._lock_playlist(playlist_id)
            pending = queue_item_crud.list_pending(self.db, playlist_id)
            size = len(pending)
            if not (0 <= from_index < size and 0 <= to_index < size):
                raise InvalidIndexError(f"Invalid fromIndex or toIndex for a queue of {size} entries")
            moved = pending.pop(from_index)
            pending.insert(to_index, moved)
            for index, item in enumerate(pending):
                if item.position != index:
                    item.position = index
        logger.info("Reordered playlist %s: %s -> %s", playlist_id, from_index, to_index)
        return pending

    async def advance_to_start(
        self,
        playlist_id: int,
        device_id: str,
        client: MusicProviderClient,
    ) -> QueueItem:
        """Transfer playback to a device and start the head of the queue there.

        The head is only marked played once both provider calls succeed.
        """
        with self._transaction("start queue"):
            self._lock_playlist(playlist_id)
            head = queue_item_crud.get_head(self.db, playlist_id)
            if head is None:
                raise EmptyQueueError("Queue is empty")
            await self._call_provider("transfer playback", client.transfer_playback(device_id))
            await self._call_provider("start playback", client.play([head.track.uri], device_id=device_id))
            self._mark_played(head, playlist_id)
        logger.info("Started playlist %s on device %s with queue item %s", playlist_id, device_id, head.id)
        return head

    async def advance_next(self, playlist_id: int, client: MusicProviderClient) -> QueueItem:
        """Play the next pending entry on the active device."""
        with self._transaction("advance queue"):
            self._lock_playlist(playlist_id)
            head = queue_item_crud.get_head(self.db, playlist_id)
            if head is None:
                raise NoNextSongError("Queue does not have next song")
            await self._call_provider("play next", client.play([head.track.uri]))
            self._mark_played(head, playlist_id)
        logger.info("Advanced playlist %s to queue item %s", playlist_id, head.id)
        return head

    def remove(self, playlist_id: int, queue_item_id: int) -> None:
        """Delete a pending or played entry. Remaining positions keep their gaps."""
        with self._transaction("remove from queue"):
            self._lock_playlist(playlist_id)
            item = queue_item_crud.get_in_playlist(self.db, playlist_id, queue_item_id)
            if not item:
                raise NotFoundError("Queue entry")
            queue_item_crud.delete(self.db, item.id, commit=False)
        logger.info("Removed queue item %s from playlist %s", queue_item_id, playlist_id)
