import httpx
import pytest

from conftest import BASE_URL, channel_payload, playlist_payload, video_payload
from tubearchivist_client.adapters.tubearchivist_repository import TubeArchivistRepository
from tubearchivist_client.domain.errors import ArchiveError
from tubearchivist_client.exceptions import NotFoundError


@pytest.fixture
def repository(api):
    return TubeArchivistRepository(api)


def _left(result):
    assert result.is_left()
    error, _ = result.monoid
    assert isinstance(error, ArchiveError)
    return error


# Scenario 1: The documented listing example
def test_get_videos_maps_first_page(repository, archive):
    """
    Given GET /api/video/?page=1&page_size=25 returning one minimal video,
    When get_videos is called,
    Then a Right with one video carrying the documented defaults is returned.
    """
    archive.add(
        "GET",
        "/api/video/",
        body={
            "data": [
                {
                    "youtube_id": "abc",
                    "title": "T",
                    "channel": {"channel_id": "c1", "channel_name": "C"},
                    "published": "2024-01-01",
                    "date_downloaded": 1700000000,
                }
            ]
        },
    )

    result = repository.get_videos()

    assert result.is_right()
    assert len(result.value) == 1
    video = result.value[0]
    assert video.id == "abc"
    assert video.duration == 0
    assert video.duration_formatted == "0:00"
    assert video.watched is False
    assert video.thumbnail_url == f"{BASE_URL}/cache/videos/abc.jpg"
    params = archive.last_request.url.params
    assert params["page"] == "1"
    assert params["page_size"] == "25"


def test_listing_order_and_length_preserved(repository, archive):
    ids = ["z", "a", "m", "b", "y"]
    archive.add("GET", "/api/video/", body={"data": [video_payload(i) for i in ids]})

    result = repository.search_videos("anything")

    assert [v.id for v in result.value] == ids


# Scenario 2: Missing video
def test_get_video_details_not_found(repository, archive, caplog):
    """
    Given a backend answering 404 for an unknown id,
    When get_video_details is called,
    Then a Left is returned with the status in its message and no exception escapes.
    """
    result = repository.get_video_details("missing")

    error = _left(result)
    assert "404" in error.message
    assert error.kind == "not_found"
    assert error.status_code == 404
    assert isinstance(error.cause, NotFoundError)
    assert "get_video_details('missing') failed" in caplog.text


def test_get_video_details_success(repository, archive):
    archive.add("GET", "/api/video/abc/", body={"data": video_payload("abc", player={"duration": 60, "duration_str": "1:00"})})

    result = repository.get_video_details("abc")

    assert result.is_right()
    assert result.value.duration == 60


def test_channels(repository, archive):
    archive.add("GET", "/api/channel/", body={"data": [channel_payload("c2"), channel_payload("c1")]})
    archive.add("GET", "/api/channel/c1/", body={"data": channel_payload("c1")})
    archive.add("GET", "/api/channel/c1/video/", body={"data": [video_payload("v2"), video_payload("v1")]})

    assert [c.id for c in repository.get_channels().value] == ["c2", "c1"]
    assert repository.get_channel_details("c1").value.thumbnail_url == f"{BASE_URL}/cache/channels/c1.jpg"
    assert [v.id for v in repository.get_channel_videos("c1").value] == ["v2", "v1"]


def test_playlists(repository, archive):
    archive.add("GET", "/api/playlist/", body={"data": [playlist_payload("PL1"), playlist_payload("PL2")]})

    result = repository.get_playlists(page=2, page_size=5)

    assert [p.id for p in result.value] == ["PL1", "PL2"]
    assert archive.last_request.url.params["page_size"] == "5"


def test_update_watch_progress_success(repository, archive):
    archive.add("POST", "/api/video/abc/progress/", body={})

    result = repository.update_watch_progress("abc", 42)

    assert result.is_right()
    assert result.value is None
    assert archive.last_json() == {"youtube_id": "abc", "position": 42}


@pytest.mark.parametrize(
    "route, kind, status",
    [
        ({"status": 500, "body": {"detail": "boom"}}, "http_status", 500),
        ({"raw": b"not json"}, "decode", None),
        ({"body": {"data": "not a list"}}, "decode", None),
    ],
)
def test_failures_become_left(repository, archive, route, kind, status):
    archive.add("GET", "/api/playlist/", **route)

    error = _left(repository.get_playlists())

    assert error.kind == kind
    assert error.status_code == status
    assert error.message


def test_transport_failure_keeps_message(repository, archive):
    archive.add("POST", "/api/video/abc/progress/", exc=httpx.ConnectError("network is unreachable"))

    error = _left(repository.update_watch_progress("abc", 10))

    assert error.kind == "transport"
    assert "network is unreachable" in error.message


def test_invalid_request_becomes_left(repository, archive):
    error = _left(repository.update_watch_progress("abc", -5))

    assert error.kind == "invalid_request"
    assert archive.requests == []


def test_unexpected_exception_becomes_left(mocker, caplog):
    api = mocker.MagicMock()
    api.base_url = BASE_URL
    api.list_channels.side_effect = RuntimeError("kaboom")

    error = _left(TubeArchivistRepository(api).get_channels())

    assert "kaboom" in error.message
    assert error.kind == "unexpected"
    assert "An unexpected error occurred in get_channels" in caplog.text
