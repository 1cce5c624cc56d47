"""Media URLs derived from the archive base URL.

These never touch the network: the backend serves cached thumbnails and
media files at fixed paths keyed by the YouTube id.
"""

from urllib.parse import quote


def normalize_base_url(base_url: str) -> str:
    """Strip surrounding whitespace and trailing slashes from a base URL."""
    return base_url.strip().rstrip("/")


def path_segment(value: str) -> str:
    """Escape an id for use as a single URL path segment."""
    return quote(value, safe="")


def video_stream_url(base_url: str, video_id: str) -> str:
    return f"{normalize_base_url(base_url)}/media/videos/{path_segment(video_id)}.mp4"


def video_thumbnail_url(base_url: str, video_id: str) -> str:
    return f"{normalize_base_url(base_url)}/cache/videos/{path_segment(video_id)}.jpg"


def channel_thumbnail_url(base_url: str, channel_id: str) -> str:
    return f"{normalize_base_url(base_url)}/cache/channels/{path_segment(channel_id)}.jpg"
