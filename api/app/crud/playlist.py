"""Playlist CRUD helpers"""

from typing import Optional
from sqlalchemy.orm import Query, Session

from app.crud.base import BaseCRUD
from app.models.playlist import Playlist


class PlaylistCRUD(BaseCRUD[Playlist, dict, dict]):
    def locked_query(self, db: Session, playlist_id: int) -> Query:
        """Select the playlist row with ``FOR UPDATE``. SQLite ignores the clause."""
        return db.query(Playlist).filter(Playlist.id == playlist_id).with_for_update()

    def get_for_update(self, db: Session, playlist_id: int) -> Optional[Playlist]:
        """Return the playlist row locked for the rest of the transaction.

        Queue mutations on the same playlist serialise on this lock.
        """
        return self.locked_query(db, playlist_id).first()


playlist_crud = PlaylistCRUD(Playlist)
