"""Health check endpoint."""

from __future__ import annotations

import time

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vidtube.api.deps import api_response, timing
from vidtube.core.extensions import db

bp = Blueprint("healthcheck", __name__)

_STARTED_AT = time.monotonic()


@bp.get("")
@timing
def healthcheck():
    """Report process uptime and database reachability."""
    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    finally:
        db.session.rollback()
    payload = {
        "status": "ok" if db_status == "ok" else "degraded",
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "database": db_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return api_response(payload, "Health check passed" if db_status == "ok" else "Database unreachable")
