from abc import ABC, abstractmethod
from typing import List

from pymonad.either import Either

from .errors import ArchiveError
from .models import Channel, Playlist, Video


class ArchiveRepository(ABC):
    """
    Port defining the contract for reaching the media archive.

    Every operation returns a Right(value) on success or a Left(ArchiveError)
    on failure. Implementations never raise.
    """

    @abstractmethod
    def get_videos(self, page: int = 1, page_size: int = 25) -> Either[ArchiveError, List[Video]]:
        pass

    @abstractmethod
    def get_video_details(self, video_id: str) -> Either[ArchiveError, Video]:
        pass

    @abstractmethod
    def search_videos(self, query: str, page: int = 1, page_size: int = 25) -> Either[ArchiveError, List[Video]]:
        pass

    @abstractmethod
    def get_channels(self, page: int = 1, page_size: int = 25) -> Either[ArchiveError, List[Channel]]:
        pass

    @abstractmethod
    def get_channel_details(self, channel_id: str) -> Either[ArchiveError, Channel]:
        pass

    @abstractmethod
    def get_channel_videos(self, channel_id: str, page: int = 1, page_size: int = 25) -> Either[ArchiveError, List[Video]]:
        pass

    @abstractmethod
    def get_playlists(self, page: int = 1, page_size: int = 25) -> Either[ArchiveError, List[Playlist]]:
        pass

    @abstractmethod
    def update_watch_progress(self, video_id: str, position: int) -> Either[ArchiveError, None]:
        """
        Reports the playback position of a video.

        Returns:
            Either: A Right(None) once the backend accepted the position,
            or a Left(ArchiveError).
        """
        pass
