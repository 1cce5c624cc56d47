"""Periodic, best-effort reporting of the playback position.

Progress reporting is telemetry: a failed report is logged and dropped, it
never stops the loop and never reaches the player.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..domain.models import WatchProgress
from ..domain.ports import ArchiveRepository

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 5.0
DEFAULT_THRESHOLD = 2
DEFAULT_FLUSH_TIMEOUT = 3.0


class TrackerState(str, Enum):
    IDLE = "idle"
    TRACKING = "tracking"


@dataclass(frozen=True)
class PlaybackSnapshot:
    """What the player is doing right now."""
    is_playing: bool
    position_ms: int
    duration_ms: int = 0

    @property
    def position_seconds(self) -> int:
        return max(0, self.position_ms // 1000)

    @property
    def duration_seconds(self) -> int:
        return max(0, self.duration_ms // 1000)


PlaybackSource = Callable[[], PlaybackSnapshot]


class WatchProgressTracker:
    """
    Reports the position of one video while it plays.

    Every ``interval`` seconds the playback source is sampled. When the
    player is playing and the position moved by more than ``threshold``
    seconds since the last report, the position is sent to the repository.
    On close, the last known position is sent once more regardless of the
    threshold, on a worker thread that is waited for at most
    ``flush_timeout`` seconds. Reports are sent one at a time, so the final
    report queues behind a periodic one still in flight and lands last.
    """

    def __init__(
        self,
        repository: ArchiveRepository,
        video_id: str,
        playback: PlaybackSource,
        interval: float = DEFAULT_INTERVAL,
        threshold: int = DEFAULT_THRESHOLD,
        flush_timeout: float = DEFAULT_FLUSH_TIMEOUT,
    ):
        if not video_id or not video_id.strip():
            raise ValueError("video_id cannot be empty")
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")

        self._repository = repository
        self._video_id = video_id
        self._playback = playback
        self._interval = interval
        self._threshold = threshold
        self._flush_timeout = flush_timeout

        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._report_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._state = TrackerState.IDLE
        self._started = False
        self._closed = False
        self._last_reported_position = 0
        self._last_known: Optional[WatchProgress] = None

    @property
    def video_id(self) -> str:
        return self._video_id

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def last_reported_position(self) -> int:
        return self._last_reported_position

    @property
    def last_known(self) -> Optional[WatchProgress]:
        return self._last_known

    def start(self) -> None:
        """Starts the reporting loop in a daemon thread."""
        with self._lock:
            if self._closed:
                raise RuntimeError("tracker is closed")
            if self._state is TrackerState.TRACKING:
                return
            self._stop_event.clear()
            self._state = TrackerState.TRACKING
            self._started = True
            self._thread = threading.Thread(
                target=self._run_loop,
                name=f"watch-progress-{self._video_id}",
                daemon=True,
            )
            self._thread.start()
        logger.info(f"Watch progress tracking started for '{self._video_id}'.")

    def stop(self) -> None:
        """Stops the loop without sending a final report."""
        self._halt(wait=self._flush_timeout)

    def close(self) -> None:
        """Stops the loop and sends one final, bounded, best-effort report."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        # The loop thread is a daemon and exits on the stop event; only the
        # final report is waited for.
        self._halt(wait=0)
        if self._started:
            self._flush()

    def _halt(self, wait: float) -> None:
        self._stop_event.set()
        thread = self._thread
        if wait > 0 and thread is not None and thread is not threading.current_thread():
            thread.join(timeout=wait)
        self._thread = None
        if self._state is TrackerState.TRACKING:
            self._state = TrackerState.IDLE
            logger.info(f"Watch progress tracking stopped for '{self._video_id}'.")

    def tick(self) -> bool:
        """
        Samples the player once and reports the position if needed.

        Returns:
            True if a report was attempted.
        """
        snapshot = self._sample()
        if snapshot is None or not snapshot.is_playing:
            return False

        position = snapshot.position_seconds
        if abs(position - self._last_reported_position) <= self._threshold:
            return False

        if not self._report(position):
            return False
        self._last_reported_position = position
        return True

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self.tick()
            except Exception as e:
                logger.warning(f"Watch progress tick failed for '{self._video_id}': {e}")

    def _sample(self) -> Optional[PlaybackSnapshot]:
        try:
            snapshot = self._playback()
        except Exception as e:
            logger.warning(f"Could not read playback state for '{self._video_id}': {e}")
            return None
        self._last_known = WatchProgress(
            video_id=self._video_id,
            position=snapshot.position_seconds,
            duration=snapshot.duration_seconds,
        )
        return snapshot

    def _report(self, position: int, final: bool = False) -> bool:
        with self._report_lock:
            if not final and self._stop_event.is_set():
                logger.debug(f"Tracker for '{self._video_id}' is stopping, dropping report at {position}s.")
                return False
            try:
                result = self._repository.update_watch_progress(self._video_id, position)
            except Exception as e:
                logger.warning(f"Failed to update watch progress for '{self._video_id}': {e}")
                return True
        if result.is_left():
            error, _ = result.monoid
            logger.warning(f"Failed to update watch progress for '{self._video_id}': {error.message}")
        else:
            logger.debug(f"Watch progress for '{self._video_id}' reported at {position}s.")
        return True

    def _flush(self) -> None:
        self._sample()
        progress = self._last_known
        if progress is None:
            return

        worker = threading.Thread(
            target=self._report,
            args=(progress.position, True),
            name=f"watch-progress-flush-{self._video_id}",
            daemon=True,
        )
        worker.start()
        worker.join(timeout=self._flush_timeout)
        if worker.is_alive():
            logger.warning(
                f"Final watch progress for '{self._video_id}' still pending after "
                f"{self._flush_timeout}s, giving up."
            )
        else:
            logger.info(
                f"Final watch progress for '{self._video_id}' sent at {progress.position}s "
                f"({progress.percent_complete:.0f}%)."
            )
