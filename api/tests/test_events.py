from datetime import datetime, timezone

import httpx

from app.crud.queue_item import queue_item_crud
from app.crud.user import user_crud
from app.services.music_providers.base import (
    ProviderDevice,
    ProviderPlaybackState,
    ProviderSearchResults,
    ProviderTrack,
)


def _queue_names(payload: dict) -> list[str]:
    return [item["track"]["name"] for item in payload["playlist"]["queue"]]


def test_list_host_events_includes_playlist_queue(client, host, event, fill_queue):
    fill_queue(event.playlist_id, [("A", 0), ("B", 1)])

    response = client.get(f"/api/v1/events/{host.name}")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["name"] == event.name
    assert data[0]["host"]["name"] == host.name
    assert [item["track"]["name"] for item in data[0]["playlist"]["queue"]] == ["A", "B"]


def test_list_host_events_unknown_host_returns_404(client):
    response = client.get("/api/v1/events/nobody-here")
    assert response.status_code == 404
    assert response.json()["detail"] == "Host not found"


def test_list_host_events_without_events_returns_404(client, host):
    response = client.get(f"/api/v1/events/{host.name}")
    assert response.status_code == 404
    assert response.json()["detail"] == "No events found for this host"


def test_playlist_returns_pending_queue_without_current_track(client, host, event, fill_queue):
    played_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    fill_queue(event.playlist_id, [("Old", -1, played_at), ("A", 0), ("B", 1)])

    response = client.get(f"/api/v1/events/{host.name}/playlist")
    assert response.status_code == 200
    data = response.json()
    assert _queue_names(data) == ["A", "B"]
    assert data["currently_playing"] is None


def test_playlist_uses_newest_active_event(client, host, event, make_event, fill_queue):
    make_event(host, name="Finished Party", is_active=False)
    newer = make_event(host, name="Late Party")
    fill_queue(newer.playlist_id, [("Late", 0)])
    fill_queue(event.playlist_id, [("Early", 0)])

    response = client.get(f"/api/v1/events/{host.name}/playlist")
    assert response.status_code == 200
    assert _queue_names(response.json()) == ["Late"]


def test_playlist_without_active_event_returns_404(client, host, make_event):
    make_event(host, name="Finished Party", is_active=False)

    response = client.get(f"/api/v1/events/{host.name}/playlist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Event not found for this host"


def test_history_lists_played_entries(client, host, event, fill_queue):
    played_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
    fill_queue(event.playlist_id, [("Old", -1, played_at), ("A", 0)])

    response = client.get(f"/api/v1/events/{host.name}/history")
    assert response.status_code == 200
    history = response.json()["history"]
    assert [item["track"]["name"] for item in history] == ["Old"]
    assert history[0]["played_at"] is not None


def test_reorder_playlist(client, host, event, fill_queue):
    fill_queue(event.playlist_id, [("A", 0), ("B", 1), ("C", 2), ("D", 3)])

    response = client.post(
        f"/api/v1/events/{host.name}/playlist/reorder",
        json={"fromIndex": 0, "toIndex": 2},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Playlist reordered successfully."

    playlist = client.get(f"/api/v1/events/{host.name}/playlist").json()
    assert _queue_names(playlist) == ["B", "C", "A", "D"]


def test_reorder_playlist_invalid_index_returns_400(client, host, event, fill_queue):
    fill_queue(event.playlist_id, [("A", 0), ("B", 1)])

    response = client.post(
        f"/api/v1/events/{host.name}/playlist/reorder",
        json={"fromIndex": 0, "toIndex": 5},
    )
    assert response.status_code == 400


def test_reorder_playlist_requires_both_indexes(client, host, event):
    response = client.post(f"/api/v1/events/{host.name}/playlist/reorder", json={"fromIndex": 0})
    assert response.status_code == 422


def test_add_song_caches_catalog_and_queues(client, host, event, fill_queue, provider_stub):
    fill_queue(event.playlist_id, [("A", 0)])

    response = client.post(f"/api/v1/events/{host.name}/songs", json={"songID": "track-1"})
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Song added successfully"
    queue_item = data["queue_item"]
    assert queue_item["position"] == 1
    assert queue_item["track"]["provider_track_id"] == "track-1"
    assert queue_item["track"]["uri"] == "spotify:track:track-1"
    assert queue_item["track"]["artist"]["name"] == "Artist"
    assert queue_item["track"]["album"]["name"] == "Test Album"

    playlist = client.get(f"/api/v1/events/{host.name}/playlist").json()
    assert _queue_names(playlist) == ["A", "Test Track"]


def test_add_song_unknown_track_returns_404(client, host, event, provider_stub):
    response = client.post(f"/api/v1/events/{host.name}/songs", json={"songID": "missing"})
    assert response.status_code == 404


def test_add_song_requires_song_id(client, host, event, provider_stub):
    response = client.post(f"/api/v1/events/{host.name}/songs", json={})
    assert response.status_code == 422


def test_remove_song(client, host, event, fill_queue):
    first, _second = fill_queue(event.playlist_id, [("A", 0), ("B", 1)])

    response = client.delete(f"/api/v1/events/{host.name}/songs/{first.id}")
    assert response.status_code == 200

    playlist = client.get(f"/api/v1/events/{host.name}/playlist").json()
    assert _queue_names(playlist) == ["B"]


def test_remove_unknown_song_returns_404(client, host, event):
    response = client.delete(f"/api/v1/events/{host.name}/songs/999999")
    assert response.status_code == 404


def test_start_plays_head_and_reports_current_track(client, host, event, fill_queue, provider_stub):
    head, _second = fill_queue(event.playlist_id, [("A", 0), ("B", 1)])

    response = client.get(f"/api/v1/events/{host.name}/start", params={"deviceId": "device-1"})
    assert response.status_code == 200
    data = response.json()
    assert data["queue_item"]["id"] == head.id
    assert data["queue_item"]["played_at"] is not None
    assert provider_stub.calls[0] == ("transfer", "device-1")
    assert provider_stub.calls[1][2] == "device-1"

    playlist = client.get(f"/api/v1/events/{host.name}/playlist").json()
    assert _queue_names(playlist) == ["B"]
    assert playlist["currently_playing"]["name"] == "A"


def test_start_requires_device_id(client, host, event, provider_stub):
    response = client.get(f"/api/v1/events/{host.name}/start")
    assert response.status_code == 422


def test_start_with_empty_queue_returns_404(client, host, event, provider_stub):
    response = client.get(f"/api/v1/events/{host.name}/start", params={"deviceId": "device-1"})
    assert response.status_code == 404
    assert provider_stub.calls == []


def test_start_without_access_token_returns_400(client, db_session, host, event, fill_queue, provider_stub):
    fill_queue(event.playlist_id, [("A", 0)])
    user_crud.update(db_session, host, {"access_token": None})

    response = client.get(f"/api/v1/events/{host.name}/start", params={"deviceId": "device-1"})
    assert response.status_code == 400


def test_next_plays_following_entry(client, host, event, fill_queue, provider_stub):
    fill_queue(event.playlist_id, [("A", 0), ("B", 1)])
    client.get(f"/api/v1/events/{host.name}/start", params={"deviceId": "device-1"})

    response = client.get(f"/api/v1/events/{host.name}/next")
    assert response.status_code == 200
    assert response.json()["queue_item"]["position"] == -1

    history = client.get(f"/api/v1/events/{host.name}/history").json()["history"]
    assert [item["track"]["name"] for item in history] == ["B", "A"]


def test_next_at_end_of_queue_returns_404(client, host, event, provider_stub):
    response = client.get(f"/api/v1/events/{host.name}/next")
    assert response.status_code == 404


def test_next_vendor_failure_returns_502_and_keeps_queue(client, host, event, fill_queue, provider_stub):
    fill_queue(event.playlist_id, [("A", 0)])
    provider_stub.fail_playback = True

    response = client.get(f"/api/v1/events/{host.name}/next")
    assert response.status_code == 502

    playlist = client.get(f"/api/v1/events/{host.name}/playlist").json()
    assert _queue_names(playlist) == ["A"]


def test_export_history_creates_private_playlist(client, host, event, fill_queue, provider_stub):
    base_time = datetime(2025, 1, 1, tzinfo=timezone.utc)
    first, second = fill_queue(
        event.playlist_id,
        [("First", 0, base_time), ("Second", -1, base_time.replace(hour=1))],
    )

    response = client.post(f"/api/v1/events/{host.name}/export")
    assert response.status_code == 200
    data = response.json()
    assert data["exported_tracks"] == 2
    assert data["playlist"]["title"] == f"History for {host.name}"
    assert data["playlist"]["is_public"] is False
    assert provider_stub.add_tracks_calls == [
        {"provider_playlist_id": "created-1", "track_ids": [first.track.uri, second.track.uri]}
    ]


def test_export_history_keeps_repeated_plays(client, db_session, host, event, make_track, provider_stub):
    encore = make_track("Encore")
    base_time = datetime(2025, 1, 1, tzinfo=timezone.utc)
    for offset, position in enumerate((0, -1)):
        queue_item_crud.create(
            db_session,
            {
                "playlist_id": event.playlist_id,
                "track_id": encore.id,
                "position": position,
                "played_at": base_time.replace(hour=offset),
            },
        )

    response = client.post(f"/api/v1/events/{host.name}/export")
    assert response.status_code == 200
    assert response.json()["exported_tracks"] == 2
    assert provider_stub.add_tracks_calls[0]["track_ids"] == [encore.uri, encore.uri]


def test_list_devices(client, host, provider_stub):
    response = client.get(f"/api/v1/events/{host.name}/devices")
    assert response.status_code == 200
    assert response.json()[0]["device_id"] == "device-1"


def test_list_devices_empty_returns_message(client, host, provider_stub):
    provider_stub.devices = []

    response = client.get(f"/api/v1/events/{host.name}/devices")
    assert response.status_code == 200
    assert response.json() == {"message": "No devices found for the user"}


def test_pause_and_resume(client, host, provider_stub):
    assert client.get(f"/api/v1/events/{host.name}/pause").status_code == 200
    assert client.get(f"/api/v1/events/{host.name}/resume").status_code == 200
    assert provider_stub.calls == [("pause",), ("play", None, None)]


def test_now_playing_reports_idle_player(client, host, provider_stub):
    response = client.get(f"/api/v1/events/{host.name}/now-playing")
    assert response.status_code == 200
    assert "message" in response.json()


def test_now_playing_returns_state(client, host, provider_stub):
    provider_stub.playback_state = ProviderPlaybackState(
        is_playing=True,
        progress_ms=1200,
        device=ProviderDevice(device_id="device-1", name="Living Room"),
        track=ProviderTrack(provider_track_id="track-1", title="Test Track"),
    )

    response = client.get(f"/api/v1/events/{host.name}/now-playing")
    assert response.status_code == 200
    data = response.json()
    assert data["is_playing"] is True
    assert data["track"]["title"] == "Test Track"


def test_get_track_passthrough(client, host, provider_stub):
    response = client.get(f"/api/v1/events/{host.name}/tracks/track-1")
    assert response.status_code == 200
    assert response.json()["title"] == "Test Track"


def test_search_without_results_returns_404(client, host, provider_stub):
    response = client.get(f"/api/v1/events/{host.name}/search/nothing")
    assert response.status_code == 404


def test_search_returns_grouped_results(client, host, provider_stub):
    provider_stub.search_results = ProviderSearchResults(
        tracks=[ProviderTrack(provider_track_id="track-9", title="Found")],
    )

    response = client.get(f"/api/v1/events/{host.name}/search/found")
    assert response.status_code == 200
    data = response.json()
    assert [track["title"] for track in data["tracks"]] == ["Found"]
    assert data["albums"] == []


def test_playback_routes_unknown_host_returns_404(client, provider_stub):
    response = client.get("/api/v1/events/nobody-here/devices")
    assert response.status_code == 404


def test_passthrough_transport_failure_returns_502(client, host, provider_stub, monkeypatch):
    async def _timeout(self, provider_track_id: str):
        raise httpx.ConnectTimeout("timed out")

    monkeypatch.setattr(provider_stub, "get_track", _timeout)

    response = client.get(f"/api/v1/events/{host.name}/tracks/track-1")
    assert response.status_code == 502


def test_search_transport_failure_returns_502(client, host, provider_stub, monkeypatch):
    async def _timeout(self, query: str, types=("track", "album", "artist"), limit: int = 20):
        raise httpx.ReadTimeout("timed out")

    monkeypatch.setattr(provider_stub, "search", _timeout)

    response = client.get(f"/api/v1/events/{host.name}/search/anything")
    assert response.status_code == 502
