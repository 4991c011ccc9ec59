"""create party queue tables

Revision ID: 3b7e1c9d2a40
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3b7e1c9d2a40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    """Create hosts, catalog, events, playlists and queue entries."""
    op.create_table(
        "users",
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("provider_user_id", sa.String(), nullable=True),
        sa.Column("access_token", sa.String(), nullable=True),
        sa.Column("refresh_token", sa.String(), nullable=True),
        sa.Column("token_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_name"), "users", ["name"], unique=True)
    op.create_index(op.f("ix_users_provider_user_id"), "users", ["provider_user_id"], unique=False)

    op.create_table(
        "playlists",
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("provider_playlist_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_playlists_id"), "playlists", ["id"], unique=False)
    op.create_index(op.f("ix_playlists_provider_playlist_id"), "playlists", ["provider_playlist_id"], unique=False)

    op.create_table(
        "artists",
        sa.Column("provider_artist_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("href", sa.String(), nullable=True),
        sa.Column("artist_type", sa.String(), nullable=True),
        sa.Column("uri", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_artists_id"), "artists", ["id"], unique=False)
    op.create_index(op.f("ix_artists_provider_artist_id"), "artists", ["provider_artist_id"], unique=True)

    op.create_table(
        "albums",
        sa.Column("provider_album_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("album_type", sa.String(), nullable=True),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("href", sa.String(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("release_date", sa.String(), nullable=True),
        sa.Column("release_date_precision", sa.String(), nullable=True),
        sa.Column("total_tracks", sa.Integer(), nullable=True),
        sa.Column("uri", sa.String(), nullable=True),
        sa.Column("artist_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["artist_id"], ["artists.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_albums_id"), "albums", ["id"], unique=False)
    op.create_index(op.f("ix_albums_provider_album_id"), "albums", ["provider_album_id"], unique=True)
    op.create_index(op.f("ix_albums_artist_id"), "albums", ["artist_id"], unique=False)

    op.create_table(
        "tracks",
        sa.Column("provider_track_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("uri", sa.String(), nullable=False),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("href", sa.String(), nullable=True),
        sa.Column("duration_ms", sa.Integer(), nullable=True),
        sa.Column("explicit", sa.Boolean(), nullable=False),
        sa.Column("disc_number", sa.Integer(), nullable=True),
        sa.Column("track_number", sa.Integer(), nullable=True),
        sa.Column("isrc", sa.String(), nullable=True),
        sa.Column("popularity", sa.Integer(), nullable=True),
        sa.Column("preview_url", sa.String(), nullable=True),
        sa.Column("is_local", sa.Boolean(), nullable=False),
        sa.Column("track_type", sa.String(), nullable=True),
        sa.Column("album_id", sa.Integer(), nullable=True),
        sa.Column("artist_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["album_id"], ["albums.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["artist_id"], ["artists.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tracks_id"), "tracks", ["id"], unique=False)
    op.create_index(op.f("ix_tracks_provider_track_id"), "tracks", ["provider_track_id"], unique=True)
    op.create_index(op.f("ix_tracks_album_id"), "tracks", ["album_id"], unique=False)
    op.create_index(op.f("ix_tracks_artist_id"), "tracks", ["artist_id"], unique=False)

    op.create_table(
        "events",
        sa.Column("host_user_id", sa.Integer(), nullable=False),
        sa.Column("playlist_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_queue_item_added", sa.DateTime(timezone=True), nullable=True),
        sa.Column("playing_track_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["host_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["playlist_id"], ["playlists.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["playing_track_id"], ["tracks.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("playlist_id"),
    )
    op.create_index(op.f("ix_events_id"), "events", ["id"], unique=False)
    op.create_index(op.f("ix_events_host_user_id"), "events", ["host_user_id"], unique=False)

    op.create_table(
        "queue_items",
        sa.Column("playlist_id", sa.Integer(), nullable=False),
        sa.Column("track_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("played_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["playlist_id"], ["playlists.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["track_id"], ["tracks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_queue_items_id"), "queue_items", ["id"], unique=False)
    op.create_index(op.f("ix_queue_items_playlist_id"), "queue_items", ["playlist_id"], unique=False)
    op.create_index(op.f("ix_queue_items_track_id"), "queue_items", ["track_id"], unique=False)
    op.create_index(
        "ix_queue_items_playlist_position",
        "queue_items",
        ["playlist_id", "position"],
        unique=False,
    )


def downgrade() -> None:
    """Drop every party queue table."""
    op.drop_index("ix_queue_items_playlist_position", table_name="queue_items")
    op.drop_index(op.f("ix_queue_items_track_id"), table_name="queue_items")
    op.drop_index(op.f("ix_queue_items_playlist_id"), table_name="queue_items")
    op.drop_index(op.f("ix_queue_items_id"), table_name="queue_items")
    op.drop_table("queue_items")

    op.drop_index(op.f("ix_events_host_user_id"), table_name="events")
    op.drop_index(op.f("ix_events_id"), table_name="events")
    op.drop_table("events")

    op.drop_index(op.f("ix_tracks_artist_id"), table_name="tracks")
    op.drop_index(op.f("ix_tracks_album_id"), table_name="tracks")
    op.drop_index(op.f("ix_tracks_provider_track_id"), table_name="tracks")
    op.drop_index(op.f("ix_tracks_id"), table_name="tracks")
    op.drop_table("tracks")

    op.drop_index(op.f("ix_albums_artist_id"), table_name="albums")
    op.drop_index(op.f("ix_albums_provider_album_id"), table_name="albums")
    op.drop_index(op.f("ix_albums_id"), table_name="albums")
    op.drop_table("albums")

    op.drop_index(op.f("ix_artists_provider_artist_id"), table_name="artists")
    op.drop_index(op.f("ix_artists_id"), table_name="artists")
    op.drop_table("artists")

    op.drop_index(op.f("ix_playlists_provider_playlist_id"), table_name="playlists")
    op.drop_index(op.f("ix_playlists_id"), table_name="playlists")
    op.drop_table("playlists")

    op.drop_index(op.f("ix_users_provider_user_id"), table_name="users")
    op.drop_index(op.f("ix_users_name"), table_name="users")
    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_table("users")
