import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .adapters.dto import (
    ChannelDto,
    DetailResponse,
    PaginatedResponse,
    PlaylistDto,
    VideoDto,
    WatchProgressDto,
)
from .exceptions import DecodeError, HttpStatusError, NotFoundError, TransportError
from .urls import (
    channel_thumbnail_url,
    normalize_base_url,
    path_segment,
    video_stream_url,
    video_thumbnail_url,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_PAGE_SIZE = 25

ModelT = TypeVar("ModelT", bound=BaseModel)


class TubeArchivistApi:
    """
    HTTP client for the TubeArchivist REST API.

    Every request carries the ``Authorization: Token <token>`` header. The
    client does not retry: failures are raised as ArchiveClientError
    subclasses and it is up to the repository to turn them into results.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            base_url: Root URL of the archive, e.g. ``https://archive.example.org``.
            token: API token of the archive user.
            timeout: Connect, read, write and pool timeout in seconds.
            transport: Optional httpx transport, mostly useful for tests.
        """
        if not base_url or not base_url.strip():
            raise ValueError("base_url cannot be empty")
        if not token or not token.strip():
            raise ValueError("token cannot be empty")

        self._base_url = normalize_base_url(base_url)
        self._token = token.strip()
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={"Accept": "application/json"},
            event_hooks={"request": [_log_request], "response": [_log_response]},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._client.close()

    def __enter__(self) -> "TubeArchivistApi":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # --- Videos ---

    def list_videos(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PaginatedResponse[VideoDto]:
        """Returns one page of archived videos, in backend order."""
        payload = self._get("/api/video/", params=_page_params(page, page_size))
        return _decode(PaginatedResponse[VideoDto], payload)

    def get_video(self, video_id: str) -> VideoDto:
        """
        Fetches a single video.

        Raises:
            ValueError: If video_id is empty.
            NotFoundError: If the archive has no such video.
        """
        _require(video_id, "video_id")
        payload = self._get(f"/api/video/{path_segment(video_id)}/")
        return _decode(DetailResponse[VideoDto], payload).data

    def search_videos(
        self, query: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> PaginatedResponse[VideoDto]:
        """Full-text search, filtered by the backend."""
        params = {"search": query}
        params.update(_page_params(page, page_size))
        payload = self._get("/api/video/", params=params)
        return _decode(PaginatedResponse[VideoDto], payload)

    # --- Channels ---

    def list_channels(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PaginatedResponse[ChannelDto]:
        payload = self._get("/api/channel/", params=_page_params(page, page_size))
        return _decode(PaginatedResponse[ChannelDto], payload)

    def get_channel(self, channel_id: str) -> ChannelDto:
        _require(channel_id, "channel_id")
        payload = self._get(f"/api/channel/{path_segment(channel_id)}/")
        return _decode(DetailResponse[ChannelDto], payload).data

    def list_channel_videos(
        self, channel_id: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> PaginatedResponse[VideoDto]:
        _require(channel_id, "channel_id")
        path = f"/api/channel/{path_segment(channel_id)}/video/"
        payload = self._get(path, params=_page_params(page, page_size))
        return _decode(PaginatedResponse[VideoDto], payload)

    # --- Playlists ---

    def list_playlists(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PaginatedResponse[PlaylistDto]:
        payload = self._get("/api/playlist/", params=_page_params(page, page_size))
        return _decode(PaginatedResponse[PlaylistDto], payload)

    # --- Watch progress ---

    def report_watch_progress(self, video_id: str, position_seconds: int) -> None:
        """
        Stores the playback position of a video on the backend.

        Raises:
            ValueError: If video_id is empty or position_seconds is negative.
        """
        _require(video_id, "video_id")
        if position_seconds < 0:
            raise ValueError(f"position_seconds must be >= 0, got {position_seconds}")

        body = WatchProgressDto(youtube_id=video_id, position=int(position_seconds))
        self._send("POST", f"/api/video/{path_segment(video_id)}/progress/", json=body.model_dump())
        logger.debug(f"Watch progress for '{video_id}' stored at {position_seconds}s.")

    # --- Derived URLs ---

    def stream_url(self, video_id: str) -> str:
        return video_stream_url(self._base_url, video_id)

    def thumbnail_url(self, video_id: str) -> str:
        return video_thumbnail_url(self._base_url, video_id)

    def channel_thumbnail_url(self, channel_id: str) -> str:
        return channel_thumbnail_url(self._base_url, channel_id)

    # --- Transport ---

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self._send("GET", path, params=params)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Response from {path} is not valid JSON: {e}")
            raise DecodeError(f"Response from {path} is not valid JSON: {e}") from e

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {"Authorization": f"Token {self._token}"}
        try:
            response = self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"{method} {path} timed out: {e}")
            raise TransportError(f"{method} {path} timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"{method} {path} returned HTTP 404 (not found)")
        if not response.is_success:
            raise HttpStatusError(
                f"{method} {path} returned HTTP {response.status_code} ({response.reason_phrase})",
                response.status_code,
            )
        return response


def _page_params(page: int, page_size: int) -> Dict[str, int]:
    return {"page": page, "page_size": page_size}


def _require(value: str, name: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{name} cannot be empty")


def _decode(model: Type[ModelT], payload: Any) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Unexpected response shape for {model.__name__}: {e}")
        raise DecodeError(f"Unexpected response shape for {model.__name__}: {e}") from e


def _log_request(request: httpx.Request) -> None:
    # Headers stay out of the log: they carry the token.
    logger.debug(f"--> {request.method} {request.url}")


def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug(f"<-- {response.status_code} {request.method} {request.url}")
