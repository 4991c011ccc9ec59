"""Event CRUD helpers"""

from typing import Optional, Sequence
from sqlalchemy.orm import Session, selectinload

from app.crud.base import BaseCRUD
from app.models.event import Event
from app.models.playlist import Playlist
from app.models.queue_item import QueueItem
from app.models.track import Track


class EventCRUD(BaseCRUD[Event, dict, dict]):
    def list_for_host(self, db: Session, host_user_id: int) -> Sequence[Event]:
        """Return every event of a host with playlist, queue and track metadata loaded."""
        return (
            db.query(Event)
            .options(
                selectinload(Event.host),
                selectinload(Event.playlist)
                .selectinload(Playlist.queue)
                .selectinload(QueueItem.track)
                .selectinload(Track.album),
                selectinload(Event.playlist)
                .selectinload(Playlist.queue)
                .selectinload(QueueItem.track)
                .selectinload(Track.artist),
            )
            .filter(Event.host_user_id == host_user_id)
            .order_by(Event.created_at.desc(), Event.id.desc())
            .all()
        )

    def get_active_for_host(self, db: Session, host_user_id: int) -> Optional[Event]:
        """Return the host's current event: the newest one still marked active."""
        return (
            db.query(Event)
            .filter(Event.host_user_id == host_user_id, Event.is_active.is_(True))
            .order_by(Event.created_at.desc(), Event.id.desc())
            .first()
        )

    def get_by_playlist_id(self, db: Session, playlist_id: int) -> Optional[Event]:
        """Return the event that owns a playlist."""
        return db.query(Event).filter(Event.playlist_id == playlist_id).first()


event_crud = EventCRUD(Event)
