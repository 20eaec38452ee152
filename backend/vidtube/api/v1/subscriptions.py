"""Channel subscription endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidtube.api.deps import api_response, path_id, require_auth, service_ctx, timing
from vidtube.schemas import OwnerSchema, ToggleResultSchema
from vidtube.services.relations.dto import RelationshipKind
from vidtube.services.relations.service import ToggleService

bp = Blueprint("subscriptions", __name__)

toggle_schema = ToggleResultSchema()
owner_list_schema = OwnerSchema(many=True)


def _service() -> ToggleService:
    return ToggleService(ctx=service_ctx())


@bp.post("/c/<channel_id>")
@require_auth
@timing
def toggle_subscription(channel_id: str):
    result = _service().toggle(path_id(channel_id, "channelId"), RelationshipKind.SUBSCRIPTION)
    message = "Subscribed successfully" if result.active else "Unsubscribed successfully"
    return api_response(toggle_schema.dump(result), message)


@bp.get("/c/<channel_id>")
@require_auth
@timing
def channel_subscribers(channel_id: str):
    subscribers = _service().list_channel_subscribers(path_id(channel_id, "channelId"))
    return api_response(owner_list_schema.dump(subscribers), "Subscribers fetched successfully")


@bp.get("/u/<subscriber_id>")
@require_auth
@timing
def subscribed_channels(subscriber_id: str):
    channels = _service().list_subscribed_channels(path_id(subscriber_id, "subscriberId"))
    return api_response(owner_list_schema.dump(channels), "Subscribed channels fetched successfully")
