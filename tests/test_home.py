import dataclasses

from pymonad.either import Left, Right

from conftest import BASE_URL
from tubearchivist_client.domain.errors import ArchiveError
from tubearchivist_client.domain.models import Video
from tubearchivist_client.presentation.home import HomeError, HomeSuccess, HomeViewModel


def make_video(index, watched=False):
    video_id = f"v{index}"
    return Video(
        id=video_id,
        title=f"Video {index}",
        channel_id="c1",
        channel_name="Channel One",
        thumbnail_url=f"{BASE_URL}/cache/videos/{video_id}.jpg",
        stream_url=f"{BASE_URL}/media/videos/{video_id}.mp4",
        duration=60,
        duration_formatted="1:00",
        published_date="2024-01-01",
        downloaded_date=1700000000,
        watched=watched,
    )


def test_home_splits_videos_into_sections(mocker):
    """
    Given 40 videos of which every third is watched,
    When the home content loads,
    Then it shows 5 featured, the next 20 as recent and up to 10 watched ones.
    """
    videos = [make_video(i, watched=(i % 3 == 0)) for i in range(40)]
    repository = mocker.MagicMock()
    repository.get_videos.return_value = Right(videos)

    view_model = HomeViewModel(repository)

    state = view_model.state
    assert isinstance(state, HomeSuccess)
    assert [v.id for v in state.featured_videos] == [f"v{i}" for i in range(5)]
    assert [v.id for v in state.recent_videos] == [f"v{i}" for i in range(5, 25)]
    assert len(state.continue_watching) == 10
    assert all(v.watched for v in state.continue_watching)
    repository.get_videos.assert_called_once_with(page=1, page_size=50)


def test_home_with_no_videos_is_an_error(mocker):
    repository = mocker.MagicMock()
    repository.get_videos.return_value = Right([])

    view_model = HomeViewModel(repository)

    assert view_model.state == HomeError("No videos found")


def test_home_failure_then_retry(mocker):
    repository = mocker.MagicMock()
    repository.get_videos.side_effect = [
        Left(ArchiveError("GET /api/video/ failed: connection refused", kind="transport")),
        Right([make_video(1)]),
    ]

    view_model = HomeViewModel(repository)
    assert view_model.state == HomeError("GET /api/video/ failed: connection refused")

    state = view_model.retry()

    assert isinstance(state, HomeSuccess)
    assert state.recent_videos == ()
    assert state.continue_watching == ()


def test_home_state_is_immutable(mocker):
    repository = mocker.MagicMock()
    repository.get_videos.return_value = Right([make_video(1)])

    state = HomeViewModel(repository).state

    try:
        state.featured_videos = ()
        assert False, "state should be frozen"
    except dataclasses.FrozenInstanceError:
        pass
