"""Factories for videos, comments, tweets and playlists."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory, SQLAlchemySession
from tests.factories.user import UserFactory
from vidtube.models import Comment, Playlist, Tweet, Video


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    id = None
    owner = factory.SubFactory(UserFactory)
    title = factory.Faker("sentence", nb_words=4)
    description = factory.Faker("paragraph")
    video_file = factory.Sequence(lambda n: f"memory://media/videos/{n}.mp4")
    thumbnail = factory.Sequence(lambda n: f"memory://media/thumbnails/{n}.jpg")
    duration = 120.0
    views = 0
    is_published = True


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    id = None
    video = factory.SubFactory(VideoFactory)
    owner = factory.SubFactory(UserFactory)
    content = factory.Faker("sentence")


class TweetFactory(BaseFactory):
    class Meta:
        model = Tweet

    id = None
    owner = factory.SubFactory(UserFactory)
    content = factory.Faker("sentence")


class PlaylistFactory(BaseFactory):
    """Playlists; pass ``videos=[...]`` to pre-fill members."""

    class Meta:
        model = Playlist

    id = None
    owner = factory.SubFactory(UserFactory)
    name = factory.Sequence(lambda n: f"Playlist {n}")
    description = factory.Faker("sentence")

    @factory.post_generation
    def videos(obj, create, extracted, **kwargs):
        if not extracted:
            return
        for video in extracted:
            obj.videos.append(video)
        if create:
            SQLAlchemySession.get().commit()
