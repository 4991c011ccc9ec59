"""Event, playlist and queue schemas"""
from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.schemas.catalog import TrackOut


class QueueItemOut(BaseModel):
    id: int
    playlist_id: int
    position: int
    played_at: datetime | None = None
    created_at: datetime
    track: TrackOut

    model_config = ConfigDict(from_attributes=True)


class PlaylistOut(BaseModel):
    id: int
    name: str
    provider_playlist_id: str | None = None
    queue: list[QueueItemOut] = []

    model_config = ConfigDict(from_attributes=True)


class EventHostOut(BaseModel):
    id: int
    name: str
    display_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


class EventOut(BaseModel):
    id: int
    name: str
    is_active: bool
    last_queue_item_added: datetime | None = None
    created_at: datetime
    host: EventHostOut
    playlist: PlaylistOut

    model_config = ConfigDict(from_attributes=True)


class CurrentlyPlayingOut(BaseModel):
    name: str
    album_name: str | None = None
    artist_name: str | None = None


class PlaylistViewOut(BaseModel):
    playlist: PlaylistOut
    currently_playing: CurrentlyPlayingOut | None = None


class HistoryOut(BaseModel):
    history: list[QueueItemOut]


class ReorderRequest(BaseModel):
    from_index: int = Field(validation_alias=AliasChoices("fromIndex", "from_index"))
    to_index: int = Field(validation_alias=AliasChoices("toIndex", "to_index"))


class AddSongRequest(BaseModel):
    song_id: str = Field(min_length=1, validation_alias=AliasChoices("songID", "song_id"))


class QueueItemActionOut(BaseModel):
    message: str
    queue_item: QueueItemOut


class MessageOut(BaseModel):
    message: str
