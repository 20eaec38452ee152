"""Tweet endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidtube.api.deps import api_response, path_id, require_auth, service_ctx, timing
from vidtube.schemas import ContentSchema, TweetSchema
from vidtube.services.tweets.service import TweetService

bp = Blueprint("tweets", __name__)

tweet_schema = TweetSchema()
content_schema = ContentSchema()


def _service() -> TweetService:
    return TweetService(ctx=service_ctx())


def _content() -> str | None:
    return content_schema.load(request.get_json(silent=True) or request.form.to_dict())["content"]


@bp.post("")
@require_auth
@timing
def create_tweet():
    tweet = _service().create(_content())
    return api_response(tweet_schema.dump(tweet), "Tweet created successfully", status=201)


@bp.get("/user/<user_id>")
@require_auth
@timing
def user_tweets(user_id: str):
    tweets = _service().list_for_user(path_id(user_id, "userId"))
    return api_response(tweet_schema.dump(tweets, many=True), "Tweets fetched successfully")


@bp.patch("/<tweet_id>")
@require_auth
@timing
def update_tweet(tweet_id: str):
    tid = path_id(tweet_id, "tweetId")
    tweet = _service().update(tid, _content())
    return api_response(tweet_schema.dump(tweet), "Tweet updated successfully")


@bp.delete("/<tweet_id>")
@require_auth
@timing
def delete_tweet(tweet_id: str):
    tweet = _service().delete(path_id(tweet_id, "tweetId"))
    return api_response(tweet_schema.dump(tweet), "Tweet deleted successfully")
