"""PlaylistService behaviour."""

from __future__ import annotations

import pytest

from tests.factories.content import PlaylistFactory, VideoFactory
from tests.factories.user import UserFactory
from vidtube.models import Playlist
from vidtube.services._shared.errors import AuthorizationError, InvalidInputError, NotFoundError
from vidtube.services.playlists.dto import PlaylistIn
from vidtube.services.playlists.service import PlaylistService


def test_create(session, ctx_for):
    user = UserFactory()
    out = PlaylistService(ctx=ctx_for(user)).create(PlaylistIn(name=" Faves ", description="best"))
    assert out.name == "Faves"
    assert out.owner.id == user.id
    assert out.videos == []


def test_create_requires_fields(session, ctx_for):
    with pytest.raises(InvalidInputError, match="All fields are required!"):
        PlaylistService(ctx=ctx_for(UserFactory())).create(PlaylistIn(name="x", description=" "))


def test_add_and_remove_video_are_idempotent(session, ctx_for):
    playlist = PlaylistFactory()
    video = VideoFactory()
    service = PlaylistService(ctx=ctx_for(playlist.owner))

    assert [v.id for v in service.add_video(playlist.id, video.id).videos] == [video.id]
    assert [v.id for v in service.add_video(playlist.id, video.id).videos] == [video.id]

    assert service.remove_video(playlist.id, video.id).videos == []
    assert service.remove_video(playlist.id, video.id).videos == []


def test_add_unknown_video(session, ctx_for):
    playlist = PlaylistFactory()
    with pytest.raises(NotFoundError):
        PlaylistService(ctx=ctx_for(playlist.owner)).add_video(playlist.id, 999_999)


def test_mutations_owner_only(session, ctx_for):
    playlist = PlaylistFactory()
    video = VideoFactory()
    stranger = PlaylistService(ctx=ctx_for(UserFactory()))

    with pytest.raises(AuthorizationError):
        stranger.add_video(playlist.id, video.id)
    with pytest.raises(AuthorizationError):
        stranger.update(playlist.id, PlaylistIn(name="n", description="d"))
    with pytest.raises(AuthorizationError):
        stranger.delete(playlist.id)


def test_get_hides_unpublished_videos_from_others(session, ctx_for):
    owner = UserFactory()
    public = VideoFactory(owner=owner)
    private = VideoFactory(owner=owner, is_published=False)
    playlist = PlaylistFactory(owner=owner, videos=[public, private])

    as_owner = PlaylistService(ctx=ctx_for(owner)).get(playlist.id)
    assert {v.id for v in as_owner.videos} == {public.id, private.id}

    as_other = PlaylistService(ctx=ctx_for(UserFactory())).get(playlist.id)
    assert [v.id for v in as_other.videos] == [public.id]


def test_update_and_delete(session, ctx_for):
    playlist = PlaylistFactory(videos=[VideoFactory()])
    service = PlaylistService(ctx=ctx_for(playlist.owner))

    out = service.update(playlist.id, PlaylistIn(name="Renamed", description="new"))
    assert out.name == "Renamed"

    service.delete(playlist.id)
    session.expire_all()
    assert session.get(Playlist, playlist.id) is None
    with pytest.raises(NotFoundError, match="No Playlist found!"):
        service.get(playlist.id)


def test_list_for_user(session, ctx_for):
    owner = UserFactory()
    a, b = PlaylistFactory(owner=owner), PlaylistFactory(owner=owner)
    PlaylistFactory()
    listed = PlaylistService(ctx=ctx_for(owner)).list_for_user(owner.id)
    assert {p.id for p in listed} == {a.id, b.id}
