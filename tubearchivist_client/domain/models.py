from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Video:
    """Represents an archived video, ready for display and playback."""
    id: str
    title: str
    channel_id: str
    channel_name: str
    thumbnail_url: str
    stream_url: str
    duration: int
    duration_formatted: str
    published_date: str
    downloaded_date: int
    description: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    view_count: int = 0
    like_count: int = 0
    watched: bool = False


@dataclass(frozen=True)
class Channel:
    """Represents an archived channel."""
    id: str
    name: str
    thumbnail_url: str
    banner_url: str = ""
    description: str = ""
    subscriber_count: int = 0
    view_count: int = 0


@dataclass(frozen=True)
class Playlist:
    """Represents an archived playlist."""
    id: str
    name: str
    channel_id: str
    channel_name: str
    thumbnail_url: str = ""
    description: str = ""


@dataclass(frozen=True)
class WatchProgress:
    """Playback position of a video, in whole seconds."""
    video_id: str
    position: int
    duration: int = 0

    def __post_init__(self):
        if self.position < 0:
            raise ValueError(f"position must be >= 0, got {self.position}")
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")

    @property
    def percent_complete(self) -> float:
        if self.duration == 0:
            return 0.0
        return min(100.0, self.position * 100.0 / self.duration)
