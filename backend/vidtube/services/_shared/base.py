"""Base class and request context shared by application services."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from vidtube.repositories.base import Pagination
from vidtube.services._shared.errors import (
    AuthorizationError,
    InvalidInputError,
    UnauthenticatedError,
)
from vidtube.services._shared.policies.common import is_owner
from vidtube.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


@dataclass(slots=True)
class ServiceContext:
    """
    Request-scoped data carried into services.

    :param actor_id: Authenticated user id, ``None`` for anonymous calls.
    :param request_id: Correlation id for logging.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hand out read-only and read-write units of work.
    * Shared guards: actor presence, ownership, pagination clamping.

    Notes
    -----
    - Services never touch ``db.session`` directly.
    - DTOs are built inside the ``with`` block, before the UoW closes.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
        sort: Iterable[str] | None = None,
    ) -> Pagination:
        """Clamp page to ``>= 1`` and limit to ``1..MAX_PAGE_LIMIT``."""
        page = max(1, int(page))
        limit = min(max(1, int(limit)), MAX_PAGE_LIMIT)
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    def require_text(self, value: Any, message: str) -> str:
        """Return ``value`` stripped; blank or non-string input is rejected.

        :raises InvalidInputError: With ``message``.
        """
        if not isinstance(value, str) or not value.strip():
            raise InvalidInputError(message)
        return value.strip()

    # --------------------------- AuthZ --------------------------------

    def require_actor(self) -> int:
        """Return the authenticated actor id.

        :raises UnauthenticatedError: If the context carries no actor.
        """
        if self.ctx.actor_id is None:
            raise UnauthenticatedError("Unauthorized request!")
        return int(self.ctx.actor_id)

    def ensure_owner(self, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the context actor owns a resource.

        :param owner_id: Owner of the resource being mutated.
        :param msg: Optional error message.
        :raises AuthorizationError: If the actor is not the owner.
        """
        if not is_owner(actor_id=self.ctx.actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You are not allowed to modify this resource.")
