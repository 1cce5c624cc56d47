"""Conversion of TubeArchivist DTOs into domain models.

All functions are pure. An empty identifier is a caller bug and raises
ValueError straight away instead of producing a half-valid model.
"""

from .adapters.dto import ChannelDto, PlaylistDto, VideoDto
from .domain.models import Channel, Playlist, Video
from .urls import channel_thumbnail_url, video_stream_url, video_thumbnail_url


def _require_id(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{what} cannot be empty")
    return value


def video_to_domain(dto: VideoDto, base_url: str) -> Video:
    """
    Maps a video DTO to a Video.

    The thumbnail and stream URLs are always derived from the base URL,
    whatever the DTO says in vid_thumb_url.
    """
    video_id = _require_id(dto.youtube_id, "youtube_id")
    player = dto.player
    stats = dto.stats

    return Video(
        id=video_id,
        title=dto.title,
        channel_id=dto.channel.channel_id,
        channel_name=dto.channel.channel_name,
        thumbnail_url=video_thumbnail_url(base_url, video_id),
        stream_url=video_stream_url(base_url, video_id),
        duration=player.duration if player else 0,
        duration_formatted=player.duration_str if player else "0:00",
        published_date=dto.published,
        downloaded_date=dto.date_downloaded,
        description=dto.description or "",
        tags=tuple(dto.tags or ()),
        view_count=(stats.view_count or 0) if stats else 0,
        like_count=(stats.like_count or 0) if stats else 0,
        watched=player.watched if player else False,
    )


def channel_to_domain(dto: ChannelDto, base_url: str) -> Channel:
    """Maps a channel DTO to a Channel; an explicit channel_thumb_url wins."""
    channel_id = _require_id(dto.channel_id, "channel_id")
    thumbnail = dto.channel_thumb_url
    if thumbnail is None:
        thumbnail = channel_thumbnail_url(base_url, channel_id)

    return Channel(
        id=channel_id,
        name=dto.channel_name,
        thumbnail_url=thumbnail,
        banner_url=dto.channel_banner_url or "",
        description=dto.channel_description or "",
        subscriber_count=dto.channel_subs or 0,
        view_count=dto.channel_views or 0,
    )


def playlist_to_domain(dto: PlaylistDto) -> Playlist:
    return Playlist(
        id=_require_id(dto.playlist_id, "playlist_id"),
        name=dto.playlist_name,
        channel_id=dto.playlist_channel_id,
        channel_name=dto.playlist_channel,
        thumbnail_url=dto.playlist_thumbnail or "",
        description=dto.playlist_description or "",
    )
