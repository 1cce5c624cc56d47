from unittest.mock import MagicMock

from behave import given, then, when
from pymonad.either import Left, Right

from tubearchivist_client.domain.errors import ArchiveError
from tubearchivist_client.services.watch_progress import (
    PlaybackSnapshot,
    TrackerState,
    WatchProgressTracker,
)


def _tracker(context, video_id, result):
    context.position = 0
    context.repository = MagicMock()
    context.repository.update_watch_progress.return_value = result
    context.tracker = WatchProgressTracker(
        context.repository,
        video_id,
        lambda: PlaybackSnapshot(is_playing=True, position_ms=context.position * 1000),
        interval=60,
    )
    context.tracker.start()


@given('a tracker for video "{video_id}" that last reported position {position:d}')
def step_tracker_reported(context, video_id, position):
    _tracker(context, video_id, Right(None))
    context.position = position
    context.tracker.tick()
    context.repository.update_watch_progress.reset_mock()


@given('a tracker for video "{video_id}" whose reports fail')
def step_tracker_failing(context, video_id):
    _tracker(context, video_id, Left(ArchiveError("HTTP 503", kind="http_status", status_code=503)))


@when("the player is sampled at positions {positions}")
def step_sample(context, positions):
    for position in positions.split(","):
        context.position = int(position)
        context.tracker.tick()


@when("the player moves to position {position:d} and the tracker is closed")
def step_close(context, position):
    context.position = position
    context.tracker.close()


@then("only position {position:d} is reported")
def step_only(context, position):
    calls = context.repository.update_watch_progress.call_args_list
    assert [c.args[1] for c in calls] == [position], calls


@then("the tracker is still tracking")
def step_still_tracking(context):
    assert context.repository.update_watch_progress.called
    assert context.tracker.state is TrackerState.TRACKING
