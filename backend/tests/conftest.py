"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. The application
uses the in-memory media uploader and fixed token secrets.
"""

from __future__ import annotations

import io
import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker
from werkzeug.datastructures import FileStorage

from vidtube.core.config import TestingConfig
from vidtube.core.extensions import db as _db
from vidtube.factory import create_app
from vidtube.infra import get_media_uploader, get_token_provider
from vidtube.services._shared.base import ServiceContext


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Keeps uploads in memory and never touches object storage.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "WARNING"
    USE_PROXYFIX = False


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


def _enable_sqlite_savepoints(engine) -> None:
    """Let pysqlite run real SAVEPOINTs inside one explicit transaction.

    The driver's own transaction handling is switched off and ``BEGIN`` is
    emitted by SQLAlchemy instead, so ``ROLLBACK TO SAVEPOINT`` only undoes
    the inner scope.
    """

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    The application context stays pushed for the whole session, so test
    client requests reuse it and never tear down the patched session.
    """
    with app.app_context():
        _enable_sqlite_savepoints(_db.engine)
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session joined to a per-test outer transaction.

    Notes
    -----
    The session runs every transaction of its own as a SAVEPOINT
    (``join_transaction_mode="create_savepoint"``): a unit of work commit
    releases it into the outer transaction and a unit of work rollback only
    discards that unit's changes. Factories commit, so the rows they build
    survive a failing service call. The outer transaction is rolled back
    after the test.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )
    scoped = scoped_session(SessionFactory)

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        if top_trans.is_active:
            top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


@pytest.fixture()
def media(app):
    """The app's in-memory uploader, emptied before each test."""
    uploader = get_media_uploader()
    uploader.fail = False
    uploader.objects.clear()
    uploader.deleted.clear()
    yield uploader
    uploader.fail = False


@pytest.fixture()
def tokens(app):
    return get_token_provider()


@pytest.fixture()
def ctx_for():
    """Build a :class:`ServiceContext` acting as the given user."""

    def _make(user) -> ServiceContext:
        return ServiceContext(actor_id=user.id if user is not None else None, request_id="test")

    return _make


@pytest.fixture()
def upload():
    """Build a werkzeug :class:`FileStorage` like the ones Flask hands to views."""

    def _make(filename: str = "file.png", data: bytes = b"bytes", content_type: str = "image/png"):
        return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)

    return _make


@pytest.fixture()
def client(app, session, media):
    """Flask test client sharing the transactional session."""
    from flask import g

    # the app context outlives requests; clear per-request g state
    for key in ("current_user", "request_id"):
        g.pop(key, None)
    yield app.test_client()
    for key in ("current_user", "request_id"):
        g.pop(key, None)


@pytest.fixture()
def auth_headers(tokens):
    """Return ``Authorization`` headers carrying a fresh access token for ``user``."""

    def _make(user) -> dict[str, str]:
        token = tokens.create_access_token(
            identity=user.id,
            additional_claims={"username": user.username, "email": user.email},
        )
        return {"Authorization": f"Bearer {token}"}

    return _make
