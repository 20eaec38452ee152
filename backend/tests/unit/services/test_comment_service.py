"""CommentService behaviour."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from tests.factories.content import CommentFactory, VideoFactory
from tests.factories.relation import LikeFactory
from tests.factories.user import UserFactory
from vidtube.models import Comment, Like, LikeTarget
from vidtube.repositories.base import Pagination
from vidtube.services._shared.errors import AuthorizationError, InvalidInputError, NotFoundError
from vidtube.services.comments.service import CommentService


def test_add_and_list(session, ctx_for):
    video = VideoFactory()
    author = UserFactory()
    service = CommentService(ctx=ctx_for(author))

    out = service.add(video.id, "  nice one  ")
    assert out.content == "nice one"
    assert out.video_id == video.id
    assert out.owner.username == author.username

    CommentFactory(video=video)
    CommentFactory()  # another video

    page = service.list_for_video(video.id, Pagination(page=1, limit=10))
    assert page.total == 2
    assert out.id in {c.id for c in page.items}


def test_add_blank_content(session, ctx_for):
    video = VideoFactory()
    with pytest.raises(InvalidInputError, match="Valid content is required!"):
        CommentService(ctx=ctx_for(UserFactory())).add(video.id, "   ")


def test_add_to_hidden_video(session, ctx_for):
    video = VideoFactory(is_published=False)
    with pytest.raises(NotFoundError):
        CommentService(ctx=ctx_for(UserFactory())).add(video.id, "hello")


def test_list_for_missing_video(session, ctx_for):
    with pytest.raises(NotFoundError):
        CommentService(ctx=ctx_for(UserFactory())).list_for_video(123456, Pagination())


def test_update_owner_only(session, ctx_for):
    comment = CommentFactory(content="before")

    with pytest.raises(AuthorizationError, match="Unauthorized to update comment!"):
        CommentService(ctx=ctx_for(UserFactory())).update(comment.id, "hijack")

    out = CommentService(ctx=ctx_for(comment.owner)).update(comment.id, "after")
    assert out.content == "after"


def test_update_missing(session, ctx_for):
    with pytest.raises(NotFoundError, match="Comment not found!"):
        CommentService(ctx=ctx_for(UserFactory())).update(999_999, "x")


def test_delete_removes_comment_and_likes(session, ctx_for):
    comment = CommentFactory()
    LikeFactory(target_kind=LikeTarget.COMMENT, target_id=comment.id)

    with pytest.raises(AuthorizationError):
        CommentService(ctx=ctx_for(UserFactory())).delete(comment.id)

    CommentService(ctx=ctx_for(comment.owner)).delete(comment.id)
    session.expire_all()
    assert session.get(Comment, comment.id) is None
    remaining = session.execute(select(func.count()).select_from(Like)).scalar_one()
    assert remaining == 0
