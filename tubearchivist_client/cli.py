import logging
from typing import Any, Callable, List, Optional

import typer
from pymonad.either import Either
from rich.console import Console
from rich.table import Table
from toolz import pipe

# App-specific imports
from .adapters.tubearchivist_repository import TubeArchivistRepository
from .config import DEFAULT_CONFIG_FILE, Settings, load_settings
from .domain.errors import AppError, ConfigError
from .domain.models import Channel, Playlist, Video
from .domain.ports import ArchiveRepository
from .i18n import get_default_lang, get_message, set_lang
from .logger_config import setup_logger
from .tubearchivist_api import TubeArchivistApi
from .urls import channel_thumbnail_url, video_stream_url, video_thumbnail_url

# Initialization
console = Console()
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tubearchivist",
    help="Browse a TubeArchivist media archive from the command line.",
    add_completion=False,
)

# --- State and Callbacks ---

state = {"lang": get_default_lang(), "config": DEFAULT_CONFIG_FILE}
set_lang(state["lang"])


@app.callback()
def main_callback(
    config: str = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help=get_message("help_config")),
    lang: Optional[str] = typer.Option(None, "--lang", help=get_message("help_lang"), show_default=False),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=get_message("help_verbose")),
):
    """Browse a TubeArchivist media archive from the command line."""
    setup_logger(logging.DEBUG if verbose else logging.WARNING)
    state["config"] = config
    if lang:
        set_lang(lang)
        state["lang"] = lang
        logger.info(f"Language explicitly set to: {lang}")


# --- Helper Functions ---


def _handle_error(error: AppError) -> None:
    """Displays a formatted error message and exits the application."""
    message = error.message
    if isinstance(error, ConfigError):
        message = get_message("config_error", error=error.message)
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=1)


def _with_repository(
    settings: Settings, action: Callable[[ArchiveRepository], Either[AppError, Any]]
) -> Either[AppError, Any]:
    """Runs an action against a repository bound to a fresh API client."""
    with TubeArchivistApi(settings.base_url, settings.token, timeout=settings.timeout) as api:
        return action(TubeArchivistRepository(api))


def _run(
    action: Callable[[ArchiveRepository, Settings], Either[AppError, Any]],
    on_success: Callable[[Any], None],
) -> None:
    pipe(
        load_settings(state["config"]),
        lambda e: e.bind(lambda settings: _with_repository(settings, lambda repo: action(repo, settings))),
        lambda e: e.either(_handle_error, on_success),
    )


def _page_size(page_size: Optional[int], settings: Settings) -> int:
    return page_size if page_size else settings.page_size


def _print_videos(videos: List[Video]) -> None:
    if not videos:
        console.print(get_message("nothing_found"))
        return
    table = Table(show_lines=False)
    table.add_column(get_message("column_id"), no_wrap=True)
    table.add_column(get_message("column_title"))
    table.add_column(get_message("column_channel"))
    table.add_column(get_message("column_duration"), justify="right")
    table.add_column(get_message("column_published"))
    for video in videos:
        title = video.title
        if video.watched:
            title = f"{title} [dim]({get_message('watched')})[/dim]"
        table.add_row(video.id, title, video.channel_name, video.duration_formatted, video.published_date)
    console.print(table)


def _print_video(video: Video) -> None:
    console.print(f"[bold]{video.title}[/bold] ({video.id})")
    console.print(f"{get_message('column_channel')}: {video.channel_name} ({video.channel_id})")
    console.print(f"{get_message('column_duration')}: {video.duration_formatted}")
    console.print(f"{get_message('column_published')}: {video.published_date}")
    console.print(f"{get_message('column_views')}: {video.view_count}")
    console.print(f"{get_message('label_stream')}: {video.stream_url}")
    if video.description:
        console.print(video.description)


def _print_channels(channels: List[Channel]) -> None:
    if not channels:
        console.print(get_message("nothing_found"))
        return
    table = Table()
    table.add_column(get_message("column_id"), no_wrap=True)
    table.add_column(get_message("column_name"))
    table.add_column(get_message("column_subscribers"), justify="right")
    for channel in channels:
        table.add_row(channel.id, channel.name, str(channel.subscriber_count))
    console.print(table)


def _print_channel(channel: Channel) -> None:
    console.print(f"[bold]{channel.name}[/bold] ({channel.id})")
    console.print(f"{get_message('column_subscribers')}: {channel.subscriber_count}")
    console.print(f"{get_message('column_views')}: {channel.view_count}")
    console.print(f"{get_message('label_thumbnail')}: {channel.thumbnail_url}")
    if channel.description:
        console.print(channel.description)


def _print_playlists(playlists: List[Playlist]) -> None:
    if not playlists:
        console.print(get_message("nothing_found"))
        return
    table = Table()
    table.add_column(get_message("column_id"), no_wrap=True)
    table.add_column(get_message("column_name"))
    table.add_column(get_message("column_channel"))
    for playlist in playlists:
        table.add_row(playlist.id, playlist.name, playlist.channel_name)
    console.print(table)


# --- CLI Commands ---


@app.command(name="videos")
def list_videos(
    page: int = typer.Option(1, "--page", "-p", min=1, help=get_message("help_page")),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", min=1, help=get_message("help_page_size")),
):
    """Lists archived videos."""
    logger.info(f"Command 'videos' initiated for page {page}.")
    console.print(f"📺 {get_message('loading_videos', page=page)}")
    _run(lambda repo, settings: repo.get_videos(page, _page_size(page_size, settings)), _print_videos)


@app.command(name="video")
def show_video(video_id: str = typer.Argument(..., help=get_message("help_video_id"))):
    """Shows the details of one video."""
    logger.info(f"Command 'video' initiated for: {video_id}")
    console.print(f"🎬 {get_message('loading_video', video_id=video_id)}")
    _run(lambda repo, settings: repo.get_video_details(video_id), _print_video)


@app.command(name="search")
def search_videos(
    query: str = typer.Argument(..., help=get_message("help_query")),
    page: int = typer.Option(1, "--page", "-p", min=1, help=get_message("help_page")),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", min=1, help=get_message("help_page_size")),
):
    """Searches archived videos."""
    logger.info(f"Command 'search' initiated for: {query}")
    console.print(f"🔎 {get_message('searching', query=query)}")
    _run(lambda repo, settings: repo.search_videos(query, page, _page_size(page_size, settings)), _print_videos)


@app.command(name="channels")
def list_channels(
    page: int = typer.Option(1, "--page", "-p", min=1, help=get_message("help_page")),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", min=1, help=get_message("help_page_size")),
):
    """Lists archived channels."""
    logger.info(f"Command 'channels' initiated for page {page}.")
    console.print(f"📡 {get_message('loading_channels', page=page)}")
    _run(lambda repo, settings: repo.get_channels(page, _page_size(page_size, settings)), _print_channels)


@app.command(name="channel")
def show_channel(channel_id: str = typer.Argument(..., help=get_message("help_channel_id"))):
    """Shows the details of one channel."""
    logger.info(f"Command 'channel' initiated for: {channel_id}")
    console.print(f"📡 {get_message('loading_channel', channel_id=channel_id)}")
    _run(lambda repo, settings: repo.get_channel_details(channel_id), _print_channel)


@app.command(name="channel-videos")
def list_channel_videos(
    channel_id: str = typer.Argument(..., help=get_message("help_channel_id")),
    page: int = typer.Option(1, "--page", "-p", min=1, help=get_message("help_page")),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", min=1, help=get_message("help_page_size")),
):
    """Lists the videos of one channel."""
    logger.info(f"Command 'channel-videos' initiated for: {channel_id}")
    console.print(f"📺 {get_message('loading_channel_videos', channel_id=channel_id, page=page)}")
    _run(
        lambda repo, settings: repo.get_channel_videos(channel_id, page, _page_size(page_size, settings)),
        _print_videos,
    )


@app.command(name="playlists")
def list_playlists(
    page: int = typer.Option(1, "--page", "-p", min=1, help=get_message("help_page")),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", min=1, help=get_message("help_page_size")),
):
    """Lists archived playlists."""
    logger.info(f"Command 'playlists' initiated for page {page}.")
    console.print(f"🎞️ {get_message('loading_playlists', page=page)}")
    _run(lambda repo, settings: repo.get_playlists(page, _page_size(page_size, settings)), _print_playlists)


@app.command(name="progress")
def report_progress(
    video_id: str = typer.Argument(..., help=get_message("help_video_id")),
    position: int = typer.Argument(..., min=0, help=get_message("help_position")),
):
    """Saves the watch progress of a video."""
    logger.info(f"Command 'progress' initiated for: {video_id} at {position}s")
    console.print(f"⏱️ {get_message('reporting_progress', video_id=video_id, position=position)}")

    def on_success(_) -> None:
        console.print(
            f"[bold green]✓ {get_message('progress_reported', video_id=video_id, position=position)}[/bold green]"
        )

    _run(lambda repo, settings: repo.update_watch_progress(video_id, position), on_success)


@app.command(name="urls")
def show_urls(
    video_id: str = typer.Argument(..., help=get_message("help_video_id")),
    channel_id: Optional[str] = typer.Option(None, "--channel-id", help=get_message("help_channel_id")),
):
    """Prints the stream and thumbnail URLs of a video, without calling the API."""

    def on_success(settings: Settings) -> None:
        console.print(f"{get_message('label_stream')}: {video_stream_url(settings.base_url, video_id)}", soft_wrap=True)
        console.print(
            f"{get_message('label_thumbnail')}: {video_thumbnail_url(settings.base_url, video_id)}", soft_wrap=True
        )
        if channel_id:
            console.print(
                f"{get_message('label_channel_thumbnail')}: {channel_thumbnail_url(settings.base_url, channel_id)}",
                soft_wrap=True,
            )

    load_settings(state["config"]).either(_handle_error, on_success)


if __name__ == "__main__":
    app()
