import logging
from dataclasses import dataclass, field
from typing import Tuple, Union

from ..domain.models import Video
from ..domain.ports import ArchiveRepository

logger = logging.getLogger(__name__)

HOME_PAGE_SIZE = 50
FEATURED_COUNT = 5
RECENT_COUNT = 20
CONTINUE_WATCHING_COUNT = 10


@dataclass(frozen=True)
class HomeLoading:
    pass


@dataclass(frozen=True)
class HomeSuccess:
    featured_videos: Tuple[Video, ...]
    recent_videos: Tuple[Video, ...]
    continue_watching: Tuple[Video, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class HomeError:
    message: str


HomeState = Union[HomeLoading, HomeSuccess, HomeError]


class HomeViewModel:
    """Builds the home screen sections from the first page of videos."""

    def __init__(self, repository: ArchiveRepository, autoload: bool = True):
        self._repository = repository
        self._state: HomeState = HomeLoading()
        if autoload:
            self.load_content()

    @property
    def state(self) -> HomeState:
        return self._state

    def load_content(self) -> HomeState:
        self._state = HomeLoading()
        result = self._repository.get_videos(page=1, page_size=HOME_PAGE_SIZE)
        self._state = result.either(self._on_error, self._on_videos)
        return self._state

    def retry(self) -> HomeState:
        return self.load_content()

    def _on_videos(self, videos) -> HomeState:
        if not videos:
            return HomeError("No videos found")
        logger.info(f"Home loaded with {len(videos)} videos.")
        return HomeSuccess(
            featured_videos=tuple(videos[:FEATURED_COUNT]),
            recent_videos=tuple(videos[FEATURED_COUNT:FEATURED_COUNT + RECENT_COUNT]),
            continue_watching=tuple([v for v in videos if v.watched][:CONTINUE_WATCHING_COUNT]),
        )

    def _on_error(self, error) -> HomeState:
        return HomeError(error.message or "Failed to load videos")
