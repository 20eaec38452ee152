"""Generic repository base and query helpers for SQLAlchemy 2.x.

Repositories are persistence-only:

* they never commit or roll back; the Unit of Work owns the transaction;
* sorting, filtering and updates go through per-repository whitelists so
  request input never reaches ``ORDER BY`` or ``setattr`` unchecked;
* pagination is deterministic (primary key is the final tiebreaker).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from vidtube.core.extensions import db

E = TypeVar("E")  # mapped entity


# ------------------------------- Pagination ----------------------------------


@dataclass(slots=True)
class Pagination:
    """Pagination input parameters.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    :param sort: Public sort tokens, ``"-"`` prefix for descending
        (e.g. ``["-createdAt"]``).
    :type sort: list[str]
    """

    page: int = 1
    limit: int = 10
    sort: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Page(Generic[E]):
    """One page of results plus counters."""

    items: Sequence[E]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


# ----------------------------- Sorting utilities -----------------------------


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Split public tokens into ``(field, is_desc)`` pairs, dropping blanks."""
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        token = (token or "").strip()
        is_desc = token.startswith("-")
        name = token.lstrip("-+").strip()
        if name:
            parsed.append((name, is_desc))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, Any],
    tokens: Iterable[str],
    *,
    default: Iterable[str] = (),
    pk_attr: InstrumentedAttribute[Any] | None = None,
) -> Select[Any]:
    """Apply whitelisted ``ORDER BY`` clauses.

    Unknown fields are ignored. When no requested token survives the
    whitelist, ``default`` tokens are used instead. The primary key is
    appended last (descending when the leading order is descending) so that
    pages never overlap.

    :param stmt: Base select.
    :param sortable_fields: Public name to column mapping.
    :param tokens: Requested sort tokens.
    :param default: Fallback tokens.
    :param pk_attr: Primary key used as tiebreaker.
    :returns: Ordered select.
    """

    def _clauses(raw: Iterable[str]) -> list[tuple[Any, bool]]:
        out: list[tuple[Any, bool]] = []
        for name, is_desc in parse_sort_tokens(raw):
            col = sortable_fields.get(name)
            if col is not None:
                out.append((col.desc() if is_desc else col.asc(), is_desc))
        return out

    orders = _clauses(tokens) or _clauses(default)
    if orders:
        stmt = stmt.order_by(*(clause for clause, _ in orders))
    if pk_attr is not None:
        leading_desc = orders[0][1] if orders else False
        stmt = stmt.order_by(pk_attr.desc() if leading_desc else pk_attr.asc())
    return stmt


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
    scalars: bool = True,
) -> tuple[list[Any], int]:
    """Run ``stmt`` for one page and count the full result set.

    The count strips ``ORDER BY``. With ``scalars=False`` rows are returned
    as tuples (used for aggregate listings).
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())

    sliced = stmt.limit(limit).offset((page - 1) * limit)
    result = session.execute(sliced)
    items = list(result.scalars().all()) if scalars else list(result.all())
    return items, total


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single aggregate.

    Subclasses set ``model`` and may override the whitelist hooks
    (``_sortable_fields``, ``_filterable_fields``, ``_updatable_fields``),
    the default ordering (``_default_sort``) and ``_default_eagerload``.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared by the Unit of Work. Falls back to the
            Flask-scoped ``db.session`` when omitted.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, Any]:
        """Public sort key to column mapping (camelCase keys)."""
        return {}

    def _default_sort(self) -> list[str]:
        """Ordering used when the request names no known field."""
        return ["-createdAt"]

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Equality-filterable fields. Unknown filter keys are ignored."""
        return {}

    def _updatable_fields(self) -> set[str]:
        """Attribute names that ``assign_updates`` may set."""
        return set()

    # ------------------------------ Internals --------------------------------

    def _apply_equality_filters(
        self, stmt: Select[Any], filters: Mapping[str, Any] | None
    ) -> Select[Any]:
        if not filters:
            return stmt
        allowed = self._filterable_fields()
        clauses = [allowed[k] == v for k, v in filters.items() if k in allowed]
        return stmt.where(and_(*clauses)) if clauses else stmt

    def _sanitize_update_fields(
        self, fields: Mapping[str, Any], *, strict: bool = True
    ) -> dict[str, Any]:
        """Keep only whitelisted keys.

        :raises ValueError: With ``strict`` when a key is not updatable.
        """
        allowed = self._updatable_fields()
        unknown = [k for k in fields if k not in allowed]
        if unknown and strict:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        return {k: v for k, v in fields.items() if k in allowed}

    def _ordered(self, stmt: Select[Any], sort: Iterable[str] | None) -> Select[Any]:
        return apply_sorting(
            stmt,
            self._sortable_fields(),
            sort or [],
            default=self._default_sort(),
            pk_attr=self._pk_attr(),
        )

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """Fetch by PK with ``FOR UPDATE`` (ignored by SQLite)."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get_for_update requires a detectable PK.")
        stmt = select(self.model).where(pk_attr == entity_id).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def find_one(self, **filters: Any) -> E | None:
        stmt = self._apply_equality_filters(select(self.model), filters)
        stmt = self._default_eagerload(stmt)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt = select(func.count()).select_from(self.model)
        stmt = self._apply_equality_filters(stmt, filters)
        return bool(self.session.execute(stmt).scalar())

    def exists_id(self, entity_id: Any) -> bool:
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.exists_id requires a detectable PK.")
        stmt = select(pk_attr).where(pk_attr == entity_id).limit(1)
        return self.session.execute(stmt).first() is not None

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
        flush: bool = True,
    ) -> E:
        """Assign whitelisted keys via ``setattr`` so ``@validates`` hooks run.

        :param instance: Entity to mutate.
        :param fields: Attribute name to new value.
        :param strict: Raise on non-whitelisted keys.
        :param flush: Flush after assignment.
        :returns: The mutated instance.
        :raises ValueError: On unknown keys (strict) or validator rejection.
        """
        for key, value in self._sanitize_update_fields(fields, strict=strict).items():
            setattr(instance, key, value)
        if flush:
            self.flush()
        return instance

    def update(self, instance: E, **fields: Any) -> E:
        return self.assign_updates(instance, fields, strict=True, flush=True)

    # ------------------------------- Listing ---------------------------------

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] | None = None,
        limit: int | None = None,
    ) -> list[E]:
        stmt = self._apply_equality_filters(select(self.model), filters)
        stmt = self._ordered(self._default_eagerload(stmt), sort)
        if limit is not None:
            stmt = stmt.limit(int(limit))
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

    def paginate(
        self,
        pagination: Pagination,
        *,
        filters: Mapping[str, Any] | None = None,
        stmt: Select[Any] | None = None,
    ) -> Page[E]:
        """Paginate ``stmt`` (default ``SELECT model``) with filters and sorting.

        :param pagination: Page, limit and sort tokens.
        :param filters: Whitelisted equality filters.
        :param stmt: Optional pre-filtered select over ``model``.
        :returns: :class:`Page` of entities.
        """
        base = stmt if stmt is not None else select(self.model)
        base = self._apply_equality_filters(base, filters)
        base = self._ordered(self._default_eagerload(base), pagination.sort)
        items, total = paginate_select(
            self.session, base, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)
