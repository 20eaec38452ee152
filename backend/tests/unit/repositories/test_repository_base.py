"""Sorting and pagination helpers shared by every repository."""

import pytest

from tests.factories.content import VideoFactory
from tests.factories.user import UserFactory
from vidtube.repositories.base import Page, Pagination, parse_sort_tokens
from vidtube.repositories.video import VideoRepository


def test_parse_sort_tokens_drops_blanks_and_reads_direction():
    assert parse_sort_tokens(["-createdAt", "title", " ", "+views"]) == [
        ("createdAt", True),
        ("title", False),
        ("views", False),
    ]


@pytest.mark.parametrize(
    "total,limit,page,pages,has_next,has_prev",
    [
        (0, 10, 1, 0, False, False),
        (25, 10, 1, 3, True, False),
        (25, 10, 3, 3, False, True),
    ],
)
def test_page_counters(total, limit, page, pages, has_next, has_prev):
    p = Page(items=[], total=total, page=page, limit=limit)
    assert p.total_pages == pages
    assert p.has_next is has_next
    assert p.has_prev is has_prev


class TestPaginate:
    @pytest.fixture()
    def repo(self, session):
        return VideoRepository(session=session)

    def test_pages_do_not_overlap(self, repo, session):
        owner = UserFactory()
        ids = {VideoFactory(owner=owner).id for _ in range(5)}

        first = repo.paginate_for_owner(owner.id, Pagination(page=1, limit=2), include_unpublished=True)
        second = repo.paginate_for_owner(owner.id, Pagination(page=2, limit=2), include_unpublished=True)
        third = repo.paginate_for_owner(owner.id, Pagination(page=3, limit=2), include_unpublished=True)

        seen = [v.id for v in (*first.items, *second.items, *third.items)]
        assert first.total == 5
        assert len(seen) == 5
        assert set(seen) == ids

    def test_whitelisted_sort_is_applied(self, repo, session):
        owner = UserFactory()
        for views in (5, 1, 9):
            VideoFactory(owner=owner, views=views)

        page = repo.paginate_for_owner(
            owner.id, Pagination(sort=["-views"]), include_unpublished=True
        )
        assert [v.views for v in page.items] == [9, 5, 1]

    def test_unknown_sort_field_falls_back_to_default(self, repo, session):
        owner = UserFactory()
        VideoFactory(owner=owner)
        page = repo.paginate_for_owner(
            owner.id, Pagination(sort=["password_hash"]), include_unpublished=True
        )
        assert page.total == 1

    def test_unpublished_hidden_unless_requested(self, repo, session):
        owner = UserFactory()
        VideoFactory(owner=owner, is_published=True)
        VideoFactory(owner=owner, is_published=False)

        public = repo.paginate_for_owner(owner.id, Pagination(), include_unpublished=False)
        full = repo.paginate_for_owner(owner.id, Pagination(), include_unpublished=True)
        assert public.total == 1
        assert full.total == 2


class TestAssignUpdates:
    def test_rejects_fields_outside_whitelist(self, session):
        repo = VideoRepository(session=session)
        video = VideoFactory()
        with pytest.raises(ValueError):
            repo.assign_updates(video, {"owner_id": 999})
