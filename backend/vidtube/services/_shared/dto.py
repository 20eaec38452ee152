"""Shared output DTOs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PageOut(Generic[T]):
    """
    One page of DTOs with navigation counters.

    :param items: DTOs of the current page.
    :param total: Rows across all pages.
    :param page: Current page (1-based).
    :param limit: Page size.
    :param total_pages: ``ceil(total / limit)``.
    :param has_next: Whether a following page exists.
    :param has_prev: Whether a previous page exists.
    """

    items: Sequence[T]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_page(cls, page, items: Sequence[T]) -> PageOut[T]:
        """Wrap mapped ``items`` with the counters of a repository ``Page``."""
        return cls(
            items=list(items),
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_prev=page.has_prev,
        )


@dataclass(frozen=True, slots=True)
class OwnerOut:
    """Compact owner block embedded in resource DTOs."""

    id: int
    username: str
    full_name: str
    avatar: str

    @classmethod
    def from_model(cls, user) -> OwnerOut:
        return cls(id=user.id, username=user.username, full_name=user.full_name, avatar=user.avatar)
