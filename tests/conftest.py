import json
import logging

import httpx
import pytest

from tubearchivist_client.tubearchivist_api import TubeArchivistApi

BASE_URL = "https://archive.test"
TOKEN = "test-token"


@pytest.fixture(autouse=True)
def _capture_all_logs(caplog):
    """Keeps every log record visible to caplog, whatever the CLI configured."""
    caplog.set_level(logging.DEBUG)


def video_payload(youtube_id="abc", **overrides):
    """Minimal video JSON as served by the archive."""
    payload = {
        "youtube_id": youtube_id,
        "title": f"Video {youtube_id}",
        "channel": {"channel_id": "c1", "channel_name": "Channel One"},
        "published": "2024-01-01",
        "date_downloaded": 1700000000,
    }
    payload.update(overrides)
    return payload


def channel_payload(channel_id="c1", **overrides):
    payload = {"channel_id": channel_id, "channel_name": f"Channel {channel_id}"}
    payload.update(overrides)
    return payload


def playlist_payload(playlist_id="PL1", **overrides):
    payload = {
        "playlist_id": playlist_id,
        "playlist_name": f"Playlist {playlist_id}",
        "playlist_channel": "Channel One",
        "playlist_channel_id": "c1",
    }
    payload.update(overrides)
    return payload


class FakeArchive:
    """Records requests and answers them with canned responses."""

    def __init__(self):
        self.requests = []
        self._routes = {}

    def add(self, method, path, status=200, body=None, raw=None, exc=None):
        self._routes[(method, path)] = (status, body, raw, exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self._routes:
            return httpx.Response(404, json={"detail": "Not found."})
        status, body, raw, exc = self._routes[key]
        if exc is not None:
            raise exc
        if raw is not None:
            return httpx.Response(status, content=raw)
        return httpx.Response(status, json=body if body is not None else {})

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def archive():
    return FakeArchive()


@pytest.fixture
def api(archive):
    client = TubeArchivistApi(BASE_URL, TOKEN, transport=httpx.MockTransport(archive.handler))
    yield client
    client.close()
