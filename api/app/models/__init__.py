from app.models.base import BaseModel
from app.models.user import User
from app.models.event import Event
from app.models.playlist import Playlist
from app.models.queue_item import QueueItem
from app.models.artist import Artist
from app.models.album import Album
from app.models.track import Track

__all__ = [
    "BaseModel",
    "User",
    "Event",
    "Playlist",
    "QueueItem",
    "Artist",
    "Album",
    "Track",
]
