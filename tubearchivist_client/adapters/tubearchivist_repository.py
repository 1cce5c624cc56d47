import logging
from typing import Callable, List, TypeVar

from pymonad.either import Either, Left, Right

from ..domain.errors import ArchiveError
from ..domain.models import Channel, Playlist, Video
from ..domain.ports import ArchiveRepository
from ..exceptions import ArchiveClientError
from ..mapper import channel_to_domain, playlist_to_domain, video_to_domain
from ..tubearchivist_api import DEFAULT_PAGE_SIZE, TubeArchivistApi

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TubeArchivistRepository(ArchiveRepository):
    """
    ArchiveRepository backed by the TubeArchivist REST API.

    Parameters are handed to the API client unchanged. DTOs come back mapped
    to domain models, in the order the backend sent them.
    """

    def __init__(self, api: TubeArchivistApi):
        self._api = api

    def get_videos(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Either[ArchiveError, List[Video]]:
        return self._run(
            "get_videos",
            lambda: [video_to_domain(dto, self._api.base_url) for dto in self._api.list_videos(page, page_size).data],
        )

    def get_video_details(self, video_id: str) -> Either[ArchiveError, Video]:
        return self._run(
            f"get_video_details('{video_id}')",
            lambda: video_to_domain(self._api.get_video(video_id), self._api.base_url),
        )

    def search_videos(
        self, query: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Either[ArchiveError, List[Video]]:
        return self._run(
            f"search_videos('{query}')",
            lambda: [
                video_to_domain(dto, self._api.base_url)
                for dto in self._api.search_videos(query, page, page_size).data
            ],
        )

    def get_channels(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Either[ArchiveError, List[Channel]]:
        return self._run(
            "get_channels",
            lambda: [
                channel_to_domain(dto, self._api.base_url)
                for dto in self._api.list_channels(page, page_size).data
            ],
        )

    def get_channel_details(self, channel_id: str) -> Either[ArchiveError, Channel]:
        return self._run(
            f"get_channel_details('{channel_id}')",
            lambda: channel_to_domain(self._api.get_channel(channel_id), self._api.base_url),
        )

    def get_channel_videos(
        self, channel_id: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Either[ArchiveError, List[Video]]:
        return self._run(
            f"get_channel_videos('{channel_id}')",
            lambda: [
                video_to_domain(dto, self._api.base_url)
                for dto in self._api.list_channel_videos(channel_id, page, page_size).data
            ],
        )

    def get_playlists(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Either[ArchiveError, List[Playlist]]:
        return self._run(
            "get_playlists",
            lambda: [playlist_to_domain(dto) for dto in self._api.list_playlists(page, page_size).data],
        )

    def update_watch_progress(self, video_id: str, position: int) -> Either[ArchiveError, None]:
        return self._run(
            f"update_watch_progress('{video_id}', {position})",
            lambda: self._api.report_watch_progress(video_id, position),
        )

    def _run(self, operation: str, call: Callable[[], T]) -> Either[ArchiveError, T]:
        """
        Executes an API call and wraps its outcome.

        Returns:
            Either: A Right(value) on success, or a Left(ArchiveError) that
            keeps the message, kind and original exception of the failure.
        """
        try:
            value = call()
        except ArchiveClientError as e:
            logger.error(f"{operation} failed: {e.message}")
            return Left(ArchiveError(e.message, kind=e.kind, status_code=e.status_code, cause=e))
        except ValueError as e:
            logger.error(f"{operation} rejected: {e}")
            return Left(ArchiveError(str(e), kind="invalid_request", cause=e))
        except Exception as e:
            logger.error(f"An unexpected error occurred in {operation}: {e}")
            return Left(ArchiveError(f"An unexpected error occurred: {e}", cause=e))

        logger.debug(f"{operation} succeeded.")
        return Right(value)
