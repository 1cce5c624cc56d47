import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from ..domain.models import Video
from ..domain.ports import ArchiveRepository
from ..services.watch_progress import PlaybackSnapshot, WatchProgressTracker

logger = logging.getLogger(__name__)

CONTROLS_TIMEOUT = 5.0


@dataclass(frozen=True)
class PlayerLoading:
    pass


@dataclass(frozen=True)
class PlayerReady:
    video: Video
    is_playing: bool = False
    current_position_ms: int = 0
    duration_ms: int = 0
    buffered_percentage: int = 0
    show_controls: bool = True


@dataclass(frozen=True)
class PlayerError:
    message: str


PlayerState = Union[PlayerLoading, PlayerReady, PlayerError]

TrackerFactory = Callable[[ArchiveRepository, str, Callable[[], PlaybackSnapshot]], WatchProgressTracker]


def _default_tracker_factory(repository, video_id, playback) -> WatchProgressTracker:
    return WatchProgressTracker(repository, video_id, playback)


class PlayerViewModel:
    """
    Playback session for one video.

    Loads the video details, keeps the playback state reported by the
    platform player and owns the watch progress tracker of the session.
    The tracker is torn down (with its final report) when the video
    changes or the session is closed.
    """

    def __init__(
        self,
        repository: ArchiveRepository,
        video_id: str,
        tracker_factory: TrackerFactory = _default_tracker_factory,
        controls_timeout: float = CONTROLS_TIMEOUT,
    ):
        self._repository = repository
        self._video_id = video_id
        self._tracker_factory = tracker_factory
        self._tracker: Optional[WatchProgressTracker] = None
        self._controls_timeout = controls_timeout
        self._controls_timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._state: PlayerState = PlayerLoading()
        self.load_video()

    @property
    def state(self) -> PlayerState:
        return self._state

    @property
    def video_id(self) -> str:
        return self._video_id

    @property
    def tracker(self) -> Optional[WatchProgressTracker]:
        return self._tracker

    def load_video(self) -> PlayerState:
        self._cancel_controls_timer()
        self._stop_tracking()
        self._state = PlayerLoading()
        result = self._repository.get_video_details(self._video_id)
        if result.is_right():
            self._state = PlayerReady(video=result.value)
            self._start_tracking()
        else:
            error, _ = result.monoid
            self._state = PlayerError(error.message or "Failed to load video")
        return self._state

    def retry(self) -> PlayerState:
        return self.load_video()

    def change_video(self, video_id: str) -> PlayerState:
        self._video_id = video_id
        return self.load_video()

    def update_playback_state(
        self, is_playing: bool, current_position_ms: int, duration_ms: int, buffered_percentage: int
    ) -> None:
        self._update(
            is_playing=is_playing,
            current_position_ms=current_position_ms,
            duration_ms=duration_ms,
            buffered_percentage=buffered_percentage,
        )

    def toggle_play_pause(self) -> None:
        with self._lock:
            if isinstance(self._state, PlayerReady):
                self._state = replace(self._state, is_playing=not self._state.is_playing)

    def seek_to(self, position_ms: int) -> None:
        self._update(current_position_ms=max(0, position_ms))

    def show_controls(self) -> None:
        """Shows the controls overlay and hides it again after a few seconds."""
        self._update(show_controls=True)
        self._cancel_controls_timer()
        timer = threading.Timer(self._controls_timeout, self.hide_controls)
        timer.daemon = True
        self._controls_timer = timer
        timer.start()

    def hide_controls(self) -> None:
        self._update(show_controls=False)

    def on_playback_error(self, message: str) -> None:
        self._stop_tracking()
        self._state = PlayerError(message)

    def close(self) -> None:
        """Ends the session; the tracker sends its final report."""
        self._cancel_controls_timer()
        self._stop_tracking()

    def _update(self, **changes) -> None:
        with self._lock:
            if isinstance(self._state, PlayerReady):
                self._state = replace(self._state, **changes)

    def _playback_snapshot(self) -> PlaybackSnapshot:
        state = self._state
        if isinstance(state, PlayerReady):
            return PlaybackSnapshot(state.is_playing, state.current_position_ms, state.duration_ms)
        return PlaybackSnapshot(is_playing=False, position_ms=0)

    def _cancel_controls_timer(self) -> None:
        timer, self._controls_timer = self._controls_timer, None
        if timer is not None:
            timer.cancel()

    def _start_tracking(self) -> None:
        self._tracker = self._tracker_factory(self._repository, self._video_id, self._playback_snapshot)
        self._tracker.start()

    def _stop_tracking(self) -> None:
        tracker, self._tracker = self._tracker, None
        if tracker is not None:
            tracker.close()
