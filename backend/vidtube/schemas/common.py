"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class PaginationQuerySchema(Schema):
    """Parse ``page``, ``limit``, ``sortBy`` and ``sortType`` query parameters.

    ``sortBy``/``sortType`` collapse into a single ``sort`` token list
    (``["-createdAt"]``); ``limit`` is clamped to ``MAX_LIMIT``.
    """

    class Meta:
        unknown = EXCLUDE

    def __init__(self, *, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))
    sort_by = fields.String(data_key="sortBy", load_default=None)
    sort_type = fields.String(
        data_key="sortType",
        load_default="desc",
        validate=validate.OneOf(["asc", "desc"]),
    )

    @post_load
    def build_tokens(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        limit = data.get("limit", self._default_limit)
        data["limit"] = min(max(limit, 1), self._max_limit)
        sort_by = (data.pop("sort_by", None) or "").strip()
        sort_type = data.pop("sort_type", "desc")
        data["sort"] = [f"-{sort_by}" if sort_type == "desc" else sort_by] if sort_by else []
        return data


class OwnerSchema(Schema):
    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(data_key="fullName")
    avatar = fields.String()


def dump_page(page: Any, item_schema: Schema) -> dict[str, Any]:
    """Serialise a ``PageOut`` into the paged payload shape."""
    return {
        "items": item_schema.dump(page.items, many=True),
        "total": int(page.total),
        "page": int(page.page),
        "limit": int(page.limit),
        "totalPages": int(page.total_pages),
        "hasNextPage": bool(page.has_next),
        "hasPrevPage": bool(page.has_prev),
    }
