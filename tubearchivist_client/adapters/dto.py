"""Models for parsing TubeArchivist API responses.

These mirror the backend JSON shape. Unknown fields are ignored so newer
backend versions keep decoding; optional fields default to None and are
resolved to domain defaults by the mapper.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "ChannelDto",
    "ChannelSummaryDto",
    "DetailResponse",
    "PaginatedResponse",
    "Pagination",
    "PlayerInfoDto",
    "PlaylistDto",
    "VideoDto",
    "VideoStatsDto",
    "WatchProgressDto",
]

ItemT = TypeVar("ItemT")


class TaModel(BaseModel):
    """Base model for TubeArchivist responses."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Pagination(TaModel):
    """Paging metadata sent alongside list responses."""

    page_size: Optional[int] = None
    page_from: Optional[int] = None
    prev_pages: Optional[List[int]] = None
    current_page: Optional[int] = None
    max_hits: bool = False  # True when the result set was truncated
    params: Optional[str] = None
    last_page: Optional[int] = None
    next_pages: Optional[List[int]] = None
    total_hits: Optional[int] = None


class PaginatedResponse(TaModel, Generic[ItemT]):
    """List envelope: ``{"data": [...], "paginate": {...}}``."""

    data: List[ItemT] = Field(default_factory=list)
    paginate: Optional[Pagination] = None


class DetailResponse(TaModel, Generic[ItemT]):
    """Single entity envelope: ``{"data": {...}}``."""

    data: ItemT


class ChannelSummaryDto(TaModel):
    """Channel reference embedded in a video."""

    channel_id: str
    channel_name: str
    channel_banner_url: Optional[str] = None
    channel_thumb_url: Optional[str] = None
    channel_tvart_url: Optional[str] = None


class PlayerInfoDto(TaModel):
    watched: bool = False
    duration: int = 0
    duration_str: str = "0:00"


class VideoStatsDto(TaModel):
    view_count: Optional[int] = None
    like_count: Optional[int] = None
    dislike_count: Optional[int] = None
    average_rating: Optional[float] = None


class VideoDto(TaModel):
    youtube_id: str
    title: str
    channel: ChannelSummaryDto
    published: str
    date_downloaded: int
    vid_last_refresh: Optional[str] = None
    tags: Optional[List[str]] = None
    vid_thumb_url: Optional[str] = None
    vid_thumb_base64: Optional[str] = None
    description: Optional[str] = None
    vid_type: Optional[str] = "videos"
    active: bool = True
    player: Optional[PlayerInfoDto] = None
    stats: Optional[VideoStatsDto] = None


class ChannelDto(TaModel):
    channel_id: str
    channel_name: str
    channel_banner_url: Optional[str] = None
    channel_thumb_url: Optional[str] = None
    channel_tvart_url: Optional[str] = None
    channel_description: Optional[str] = None
    channel_last_refresh: Optional[str] = None
    channel_subs: Optional[int] = None
    channel_views: Optional[int] = None
    channel_active: bool = True


class PlaylistDto(TaModel):
    playlist_id: str
    playlist_name: str
    playlist_channel: str
    playlist_channel_id: str
    playlist_thumbnail: Optional[str] = None
    playlist_description: Optional[str] = None
    playlist_last_refresh: Optional[str] = None


class WatchProgressDto(TaModel):
    """Request body for the progress endpoint."""

    youtube_id: str
    position: int
