import httpx
from behave import given, then, when

from tubearchivist_client.adapters.tubearchivist_repository import TubeArchivistRepository
from tubearchivist_client.tubearchivist_api import TubeArchivistApi

BASE_URL = "https://archive.test"


def _connect(context, routes):
    context.requests = []

    def handler(request):
        context.requests.append(request)
        body = routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"detail": "Not found."})
        return httpx.Response(200, json=body)

    context.api = TubeArchivistApi(BASE_URL, "behave-token", transport=httpx.MockTransport(handler))
    context.repository = TubeArchivistRepository(context.api)


@given('the archive serves a video "{video_id}" without playback metadata')
def step_serves_video(context, video_id):
    _connect(
        context,
        {
            "/api/video/": {
                "data": [
                    {
                        "youtube_id": video_id,
                        "title": "T",
                        "channel": {"channel_id": "c1", "channel_name": "C"},
                        "published": "2024-01-01",
                        "date_downloaded": 1700000000,
                    }
                ]
            }
        },
    )


@given('the archive does not know the video "{video_id}"')
def step_unknown_video(context, video_id):
    _connect(context, {})


@when("I ask the repository for the videos")
def step_get_videos(context):
    context.result = context.repository.get_videos()


@when('I ask the repository for the details of "{video_id}"')
def step_get_details(context, video_id):
    context.result = context.repository.get_video_details(video_id)


@then("the result is a success with {count:d} video")
def step_success(context, count):
    assert context.result.is_right(), context.result.monoid
    assert len(context.result.value) == count
    context.videos = {video.id: video for video in context.result.value}


@then('video "{video_id}" has duration {duration:d} shown as "{formatted}"')
def step_duration(context, video_id, duration, formatted):
    video = context.videos[video_id]
    assert video.duration == duration
    assert video.duration_formatted == formatted


@then('video "{video_id}" is not watched')
def step_not_watched(context, video_id):
    assert context.videos[video_id].watched is False


@then('video "{video_id}" has its thumbnail under "{path}"')
def step_thumbnail(context, video_id, path):
    assert context.videos[video_id].thumbnail_url == BASE_URL + path


@then("the request asked for page {page:d} with page size {page_size:d}")
def step_paging(context, page, page_size):
    params = context.requests[-1].url.params
    assert params["page"] == str(page)
    assert params["page_size"] == str(page_size)


@then('the result is a failure mentioning "{text}"')
def step_failure(context, text):
    assert context.result.is_left()
    error, _ = context.result.monoid
    assert text in error.message, error.message
