from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ChannelStatsOut:
    """
    Aggregate counters for the caller's channel.

    :param total_subscribers: Users subscribed to the channel.
    :param total_videos: Videos owned, published or not.
    :param total_views: Sum of ``views`` across those videos.
    :param total_likes: Likes received on those videos.
    """

    total_subscribers: int
    total_videos: int
    total_views: int
    total_likes: int
