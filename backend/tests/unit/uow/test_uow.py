"""
Unit tests for the read-write and read-only units of work.
"""

from __future__ import annotations

import pytest
from sqlalchemy import select, text

from tests.factories.user import UserFactory
from vidtube.models import User
from vidtube.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from vidtube.uow import SQLAlchemyUnitOfWork as RWuow


class TestWriterUnitOfWork:
    def test_commits_on_success(self, db, session):
        initial = db.session.query(User).count()

        with RWuow() as uow:
            uow.users.add(UserFactory.build())

        assert db.session.query(User).count() == initial + 1

    def test_rolls_back_on_exception(self, db, session):
        initial = db.session.query(User).count()

        with pytest.raises(RuntimeError), RWuow() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        assert db.session.query(User).count() == initial

    def test_exposes_every_repository(self, session):
        uow = RWuow()
        for name in ("users", "videos", "comments", "tweets", "playlists", "likes", "subscriptions"):
            assert getattr(uow, name).session is uow.session


class TestReadOnlyUnitOfWork:
    def test_allows_reads(self, session):
        user = UserFactory()
        with ROuow() as uow:
            assert uow.users.get(user.id).id == user.id

    def test_blocks_orm_flush(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_blocks_core_dml(self, session):
        UserFactory()
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(text("DELETE FROM users"))

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guards_are_removed_on_exit(self, session):
        user = UserFactory()
        with ROuow() as uow:
            uow.users.get(user.id)

        with RWuow() as uow:
            uow.users.assign_updates(uow.users.get(user.id), {"full_name": "Renamed"})

        name = session.execute(select(User.full_name).where(User.id == user.id)).scalar_one()
        assert name == "Renamed"
