"""Queue item CRUD helpers"""

from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.crud.base import BaseCRUD
from app.models.queue_item import QueueItem
from app.models.track import Track


def _with_track(query):
    return query.options(
        selectinload(QueueItem.track).selectinload(Track.album),
        selectinload(QueueItem.track).selectinload(Track.artist),
    )


class QueueItemCRUD(BaseCRUD[QueueItem, dict, dict]):
    def get_in_playlist(self, db: Session, playlist_id: int, queue_item_id: int) -> Optional[QueueItem]:
        """Return a queue entry only when it belongs to the playlist."""
        return (
            db.query(QueueItem)
            .filter(
                QueueItem.playlist_id == playlist_id,
                QueueItem.id == queue_item_id,
            )
            .first()
        )

    def list_pending(self, db: Session, playlist_id: int) -> list[QueueItem]:
        """Return unplayed entries in play order."""
        return (
            _with_track(db.query(QueueItem))
            .filter(
                QueueItem.playlist_id == playlist_id,
                QueueItem.played_at.is_(None),
            )
            .order_by(QueueItem.position.asc(), QueueItem.id.asc())
            .all()
        )

    def list_history(self, db: Session, playlist_id: int) -> list[QueueItem]:
        """Return played entries, most recently played first."""
        return (
            _with_track(db.query(QueueItem))
            .filter(
                QueueItem.playlist_id == playlist_id,
                QueueItem.played_at.is_not(None),
            )
            .order_by(QueueItem.played_at.desc(), QueueItem.id.desc())
            .all()
        )

    def get_head(self, db: Session, playlist_id: int) -> Optional[QueueItem]:
        """Return the next entry to play."""
        return (
            db.query(QueueItem)
            .options(selectinload(QueueItem.track))
            .filter(
                QueueItem.playlist_id == playlist_id,
                QueueItem.played_at.is_(None),
            )
            .order_by(QueueItem.position.asc(), QueueItem.id.asc())
            .first()
        )

    def max_position(self, db: Session, playlist_id: int) -> int | None:
        """Return the highest position stored for the playlist, if any."""
        return (
            db.query(func.max(QueueItem.position))
            .filter(QueueItem.playlist_id == playlist_id)
            .scalar()
        )


queue_item_crud = QueueItemCRUD(QueueItem)
