import pytest
from pymonad.either import Left, Right
from typer.testing import CliRunner

from test_home import make_video
from tubearchivist_client.cli import app
from tubearchivist_client.domain.errors import ArchiveError
from tubearchivist_client.domain.models import Channel, Playlist
from tubearchivist_client.i18n import set_lang

runner = CliRunner()

ENV = {"TA_BASE_URL": "https://archive.test", "TA_TOKEN": "cli-token"}


@pytest.fixture(autouse=True)
def english():
    set_lang("en")
    yield
    set_lang("en")


@pytest.fixture
def config_args(tmp_path):
    return ["--config", str(tmp_path / "absent.yml"), "--lang", "en"]


@pytest.fixture
def mock_repository(mocker):
    """Replaces the repository built by the CLI."""
    repository = mocker.MagicMock()
    mocker.patch("tubearchivist_client.cli.TubeArchivistRepository", return_value=repository)
    return repository


def test_videos_lists_titles(config_args, mock_repository):
    mock_repository.get_videos.return_value = Right([make_video(1), make_video(2, watched=True)])

    result = runner.invoke(app, config_args + ["videos", "--page", "2"], env=ENV)

    assert result.exit_code == 0
    assert "v1" in result.stdout
    assert "v2" in result.stdout
    assert "watched" in result.stdout
    mock_repository.get_videos.assert_called_once_with(2, 25)


def test_search_uses_page_size_option(config_args, mock_repository):
    mock_repository.search_videos.return_value = Right([])

    result = runner.invoke(app, config_args + ["search", "cats", "-n", "5"], env=ENV)

    assert result.exit_code == 0
    assert "Nothing found." in result.stdout
    mock_repository.search_videos.assert_called_once_with("cats", 1, 5)


def test_video_details(config_args, mock_repository):
    mock_repository.get_video_details.return_value = Right(make_video(7))

    result = runner.invoke(app, config_args + ["video", "v7"], env=ENV)

    assert result.exit_code == 0
    assert "Video 7" in result.stdout
    assert "/media/videos/v7.mp4" in result.stdout


def test_video_not_found_exits_with_error(config_args, mock_repository):
    """
    Given a repository returning a 404 failure,
    When the 'video' command runs,
    Then the error is printed and the exit code is 1.
    """
    mock_repository.get_video_details.return_value = Left(
        ArchiveError("GET /api/video/nope/ returned HTTP 404 (not found)", kind="not_found", status_code=404)
    )

    result = runner.invoke(app, config_args + ["video", "nope"], env=ENV)

    assert result.exit_code == 1
    assert "Error:" in result.stdout
    assert "404" in result.stdout


def test_channels_and_playlists(config_args, mock_repository):
    mock_repository.get_channels.return_value = Right(
        [Channel(id="c1", name="Chan", thumbnail_url="x", subscriber_count=12)]
    )
    mock_repository.get_playlists.return_value = Right(
        [Playlist(id="PL1", name="Mix", channel_id="c1", channel_name="Chan")]
    )

    channels = runner.invoke(app, config_args + ["channels"], env=ENV)
    playlists = runner.invoke(app, config_args + ["playlists"], env=ENV)

    assert channels.exit_code == 0
    assert "Chan" in channels.stdout
    assert playlists.exit_code == 0
    assert "PL1" in playlists.stdout


def test_channel_videos(config_args, mock_repository):
    mock_repository.get_channel_videos.return_value = Right([make_video(3)])

    result = runner.invoke(app, config_args + ["channel-videos", "c1"], env=ENV)

    assert result.exit_code == 0
    mock_repository.get_channel_videos.assert_called_once_with("c1", 1, 25)


def test_progress(config_args, mock_repository):
    mock_repository.update_watch_progress.return_value = Right(None)

    result = runner.invoke(app, config_args + ["progress", "v1", "120"], env=ENV)

    assert result.exit_code == 0
    assert "saved at 120s" in result.stdout
    mock_repository.update_watch_progress.assert_called_once_with("v1", 120)


def test_urls_need_no_network(config_args, mock_repository):
    result = runner.invoke(app, config_args + ["urls", "abc", "--channel-id", "c1"], env=ENV)

    assert result.exit_code == 0
    assert "https://archive.test/media/videos/abc.mp4" in result.stdout
    assert "https://archive.test/cache/videos/abc.jpg" in result.stdout
    assert "https://archive.test/cache/channels/c1.jpg" in result.stdout
    mock_repository.assert_not_called()


def test_missing_configuration(config_args, mock_repository):
    result = runner.invoke(app, config_args + ["videos"], env={"TA_BASE_URL": "", "TA_TOKEN": ""})

    assert result.exit_code == 1
    assert "Configuration error" in result.stdout
    mock_repository.get_videos.assert_not_called()


def test_french_messages(config_args, mock_repository):
    mock_repository.get_playlists.return_value = Right([])
    args = config_args[:2] + ["--lang", "fr", "playlists"]

    result = runner.invoke(app, args, env=ENV)

    assert result.exit_code == 0
    assert "Aucun résultat." in result.stdout
