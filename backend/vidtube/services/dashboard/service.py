"""DashboardService: the caller's channel statistics and video list."""

from __future__ import annotations

from vidtube.repositories.base import Pagination
from vidtube.services._shared.base import BaseService
from vidtube.services._shared.dto import PageOut
from vidtube.services.dashboard.dto import ChannelStatsOut
from vidtube.services.videos.dto import VideoOut


class DashboardService(BaseService):
    def channel_stats(self) -> ChannelStatsOut:
        actor_id = self.require_actor()
        with self.ro_uow() as uow:
            total_videos, total_views = uow.videos.channel_totals(actor_id)
            return ChannelStatsOut(
                total_subscribers=uow.users.count_subscribers(actor_id),
                total_videos=total_videos,
                total_views=total_views,
                total_likes=uow.likes.total_video_likes_for_channel(actor_id),
            )

    def channel_videos(self, pagination: Pagination) -> PageOut[VideoOut]:
        """All of the caller's videos, unpublished included."""
        actor_id = self.require_actor()
        pagination = self.ensure_pagination(
            page=pagination.page, limit=pagination.limit, sort=pagination.sort
        )
        with self.ro_uow() as uow:
            page = uow.videos.paginate_for_owner(actor_id, pagination, include_unpublished=True)
            return PageOut.from_page(page, [VideoOut.from_model(v) for v in page.items])
