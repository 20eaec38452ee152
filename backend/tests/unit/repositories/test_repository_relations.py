"""Like, subscription and playlist membership repositories."""

import pytest

from tests.factories.content import PlaylistFactory, VideoFactory
from tests.factories.relation import LikeFactory, SubscriptionFactory
from tests.factories.user import UserFactory
from vidtube.models import LikeTarget
from vidtube.repositories import LikeRepository, PlaylistRepository, SubscriptionRepository


class TestLikeRepository:
    @pytest.fixture()
    def repo(self, session):
        return LikeRepository(session=session)

    def test_remove_edge_reports_rowcount(self, repo, session):
        like = LikeFactory()
        assert repo.remove_edge(like.liked_by_id, LikeTarget.VIDEO, like.target_id) == 1
        assert repo.remove_edge(like.liked_by_id, LikeTarget.VIDEO, like.target_id) == 0

    def test_liked_videos(self, repo, session):
        fan = UserFactory()
        video = VideoFactory()
        repo.add_edge(fan.id, LikeTarget.VIDEO, video.id)
        LikeFactory(target_id=video.id)

        assert [v.id for v in repo.liked_videos(fan.id)] == [video.id]

    def test_total_video_likes_for_channel(self, repo, session):
        channel = UserFactory()
        v1, v2 = VideoFactory(owner=channel), VideoFactory(owner=channel)
        LikeFactory(target_id=v1.id)
        LikeFactory(target_id=v1.id)
        LikeFactory(target_id=v2.id)
        LikeFactory()  # another channel's video

        assert repo.total_video_likes_for_channel(channel.id) == 3


class TestSubscriptionRepository:
    @pytest.fixture()
    def repo(self, session):
        return SubscriptionRepository(session=session)

    def test_edges_and_listings(self, repo, session):
        channel, fan = UserFactory(), UserFactory()
        repo.add_edge(fan.id, channel.id)

        assert repo.is_subscribed(fan.id, channel.id)
        assert not repo.is_subscribed(channel.id, fan.id)
        assert [u.id for u in repo.subscribers_of(channel.id)] == [fan.id]
        assert [u.id for u in repo.channels_of(fan.id)] == [channel.id]

        assert repo.remove_edge(fan.id, channel.id) == 1
        assert not repo.is_subscribed(fan.id, channel.id)

    def test_remove_missing_edge_is_zero(self, repo, session):
        sub = SubscriptionFactory()
        assert repo.remove_edge(sub.channel_id, sub.subscriber_id) == 0


class TestPlaylistRepository:
    @pytest.fixture()
    def repo(self, session):
        return PlaylistRepository(session=session)

    def test_add_video_is_idempotent(self, repo, session):
        playlist, video = PlaylistFactory(), VideoFactory()
        assert repo.add_video(playlist, video.id) is True
        assert repo.add_video(playlist, video.id) is False
        assert [v.id for v in playlist.videos] == [video.id]

    def test_remove_video_reports_change(self, repo, session):
        video = VideoFactory()
        playlist = PlaylistFactory(videos=[video])
        assert repo.remove_video(playlist, video.id) is True
        assert repo.remove_video(playlist, video.id) is False
        assert playlist.videos == []

    def test_delete_with_links_keeps_videos(self, repo, session):
        video = VideoFactory()
        playlist = PlaylistFactory(videos=[video])
        repo.delete_with_links(playlist)

        assert not repo.exists_id(playlist.id)
        assert not repo.contains(playlist.id, video.id)
