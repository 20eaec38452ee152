"""HTTP tests for videos, likes, subscriptions and routing errors."""

from __future__ import annotations

import io

import pytest

from tests.factories.content import VideoFactory
from tests.factories.user import UserFactory
from tests.helpers.utils import envelope

V1 = "/api/v1"


def _publish_form(**overrides):
    form = {
        "title": "First upload",
        "description": "Hello",
        "duration": "42",
        "videoFile": (io.BytesIO(b"mp4"), "clip.mp4"),
        "thumbnail": (io.BytesIO(b"jpg"), "thumb.jpg"),
    }
    form.update(overrides)
    return form


def test_publish_get_and_foreign_patch(client, auth_headers):
    owner, stranger = UserFactory(), UserFactory()

    created = client.post(
        f"{V1}/videos/publish",
        data=_publish_form(),
        headers=auth_headers(owner),
        content_type="multipart/form-data",
    )
    body = envelope(created)
    assert created.status_code == 201
    video_id = body["data"]["id"]
    assert body["data"]["owner"]["id"] == owner.id
    assert body["data"]["duration"] == 42.0

    fetched = client.get(f"{V1}/videos/{video_id}", headers=auth_headers(stranger))
    assert envelope(fetched)["data"]["title"] == "First upload"

    denied = client.patch(
        f"{V1}/videos/{video_id}",
        json={"title": "mine now", "description": "x"},
        headers=auth_headers(stranger),
    )
    assert denied.status_code == 403


def test_list_videos_paged(client, auth_headers):
    owner = UserFactory()
    for _ in range(3):
        VideoFactory(owner=owner)
    resp = client.get(
        f"{V1}/videos?userId={owner.id}&page=1&limit=2&sortBy=views&sortType=desc",
        headers=auth_headers(owner),
    )
    data = envelope(resp)["data"]
    assert data["total"] == 3
    assert len(data["items"]) == 2
    assert data["hasNextPage"] is True


def test_list_videos_query_and_publish_filter(client, auth_headers):
    owner = UserFactory()
    match = VideoFactory(owner=owner, title="Morning run", is_published=False)
    VideoFactory(owner=owner, title="Morning swim", is_published=True)
    VideoFactory(owner=owner, title="Evening run", is_published=False)

    resp = client.get(
        f"{V1}/videos?userId={owner.id}&query=MORNING&isPublished=false",
        headers=auth_headers(owner),
    )
    data = envelope(resp)["data"]
    assert [v["id"] for v in data["items"]] == [match.id]


def test_list_videos_bad_publish_filter(client, auth_headers):
    owner = UserFactory()
    resp = client.get(
        f"{V1}/videos?userId={owner.id}&isPublished=maybe", headers=auth_headers(owner)
    )
    assert resp.status_code == 400


def test_toggle_publish_message(client, auth_headers):
    video = VideoFactory(is_published=True)
    resp = client.patch(f"{V1}/videos/toggle/publish/{video.id}", headers=auth_headers(video.owner))
    assert envelope(resp)["message"] == "Successfully set video publish status to unpublished"


@pytest.mark.parametrize("raw", ["abc", "0", "-3", "²", "١٢", "99999999999999999999"])
def test_malformed_video_id(client, auth_headers, raw):
    resp = client.get(f"{V1}/videos/{raw}", headers=auth_headers(UserFactory()))
    assert resp.status_code == 400
    assert envelope(resp)["message"] == "Valid videoId is required!"


def test_oversized_id_on_like_toggle(client, auth_headers):
    resp = client.post(
        f"{V1}/likes/toggle/v/99999999999999999999", headers=auth_headers(UserFactory())
    )
    assert resp.status_code == 400
    assert envelope(resp)["message"] == "Valid videoId is required!"


def test_like_toggle_twice(client, auth_headers):
    video = VideoFactory()
    headers = auth_headers(UserFactory())

    first = envelope(client.post(f"{V1}/likes/toggle/v/{video.id}", headers=headers))
    assert first["message"] == "Video liked successfully"
    assert first["data"]["active"] is True

    second = envelope(client.post(f"{V1}/likes/toggle/v/{video.id}", headers=headers))
    assert second["message"] == "Video unliked successfully"
    assert second["data"]["active"] is False


def test_like_missing_video(client, auth_headers):
    resp = client.post(f"{V1}/likes/toggle/v/999999", headers=auth_headers(UserFactory()))
    assert resp.status_code == 404


def test_subscription_toggle_and_listing(client, auth_headers):
    fan, channel = UserFactory(), UserFactory()
    headers = auth_headers(fan)

    sub = envelope(client.post(f"{V1}/subscriptions/c/{channel.id}", headers=headers))
    assert sub["message"] == "Subscribed successfully"

    listing = envelope(client.get(f"{V1}/subscriptions/c/{channel.id}", headers=headers))
    assert [u["id"] for u in listing["data"]] == [fan.id]

    unsub = envelope(client.post(f"{V1}/subscriptions/c/{channel.id}", headers=headers))
    assert unsub["message"] == "Unsubscribed successfully"


def test_self_subscription_is_bad_request(client, auth_headers):
    user = UserFactory()
    resp = client.post(f"{V1}/subscriptions/c/{user.id}", headers=auth_headers(user))
    assert resp.status_code == 400


def test_comment_create_and_forbidden_edit(client, auth_headers):
    video = VideoFactory()
    author, other = UserFactory(), UserFactory()

    created = client.post(
        f"{V1}/comments/{video.id}", json={"content": "first!"}, headers=auth_headers(author)
    )
    assert created.status_code == 201
    comment_id = envelope(created)["data"]["id"]

    denied = client.patch(
        f"{V1}/comments/c/{comment_id}", json={"content": "edited"}, headers=auth_headers(other)
    )
    assert denied.status_code == 403
    assert envelope(denied)["message"] == "Unauthorized to update comment!"


def test_dashboard_stats(client, auth_headers):
    owner = UserFactory()
    VideoFactory(owner=owner, views=7)
    resp = client.get(f"{V1}/dashboard/stats", headers=auth_headers(owner))
    data = envelope(resp)["data"]
    assert data["totalVideos"] == 1
    assert data["totalViews"] == 7


def test_unknown_route(client):
    resp = client.get("/x")
    assert resp.status_code == 404
    assert envelope(resp)["message"] == "Route '/x' not found"


def test_healthcheck(client):
    resp = client.get(f"{V1}/healthcheck")
    data = envelope(resp)["data"]
    assert data["status"] == "ok"
    assert data["database"] == "ok"
