# mypy: ignore-errors
# tests/test_repository.py
"""Tests for the generic repository and its value objects."""

import pytest

from devspark.core.settings import settings
from devspark.models import Channel, Post, Tag
from devspark.repositories.base import DeletePredicate, Pagination, Repository
from devspark.services.errors import ValidationError


def test_pagination_defaults() -> None:
    pagination = Pagination.from_params(None, None)
    assert pagination.page == 0
    assert pagination.size == settings.default_page_size


@pytest.mark.parametrize(
    ("page", "size"),
    [(-1, 10), (0, 0), (0, settings.max_page_size + 1)],
)
def test_pagination_rejects_out_of_range(page, size) -> None:
    with pytest.raises(ValidationError):
        Pagination.from_params(page, size)


def test_pagination_window() -> None:
    pagination = Pagination(page=3, size=7)
    assert pagination.offset == 21
    assert pagination.limit == 7


def test_delete_predicate_variants() -> None:
    forced = DeletePredicate.by_id("c1")
    owned = DeletePredicate.by_id_and_owner("c1", "u1")
    assert forced.forced is True
    assert owned.forced is False
    assert len(forced.clauses(Channel)) == 1
    assert len(owned.clauses(Channel)) == 2


def test_delete_by_id_and_owner_requires_both(db_session, public_channel, stranger, owner) -> None:
    repo = Repository(db_session, Channel)

    assert repo.delete(DeletePredicate.by_id_and_owner(public_channel.id, stranger.id)) is False
    assert repo.get(public_channel.id) is not None
    assert repo.delete(DeletePredicate.by_id_and_owner(public_channel.id, owner.id)) is True
    db_session.commit()
    assert repo.get(public_channel.id) is None


def test_exists_requires_every_id(db_session, make_tag) -> None:
    first = make_tag()
    second = make_tag()
    repo = Repository(db_session, Tag)

    assert repo.exists([first.id, second.id]) is True
    assert repo.exists([first.id, "missing"]) is False
    assert repo.exists([]) is True


def test_get_all_pages_requested_ids(db_session, make_tag) -> None:
    tags = [make_tag() for _ in range(3)]
    repo = Repository(db_session, Tag)

    found = repo.get_all([tag.id for tag in tags[:2]], Pagination(page=0, size=10))

    assert {tag.id for tag in found} == {tags[0].id, tags[1].id}
    assert repo.get_all([], Pagination()) == []


def test_update_reports_match(db_session, public_channel) -> None:
    repo = Repository(db_session, Channel)
    assert repo.update(public_channel.id, {"name": "renamed"}) is True
    assert repo.update("missing", {"name": "renamed"}) is False
    db_session.commit()
    db_session.refresh(public_channel)
    assert public_channel.name == "renamed"


def test_field_lookups(db_session, make_post, public_channel) -> None:
    posts = [make_post(public_channel) for _ in range(3)]
    repo = Repository(db_session, Post)

    assert sorted(repo.ids_where("channel_id", public_channel.id)) == sorted(p.id for p in posts)
    assert len(repo.find_by_field("channel_id", public_channel.id, Pagination(0, 2))) == 2
    assert repo.delete_all("channel_id", public_channel.id) == 3
    assert repo.delete_in("channel_id", []) == 0


def test_unknown_field_rejected(db_session) -> None:
    with pytest.raises(AttributeError):
        Repository(db_session, Tag).find_by_field("colour", "red", Pagination())


def test_default_page_size_follows_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "default_page_size", 7)
    assert Pagination().size == 7
    assert Pagination.from_params(2, None) == Pagination(page=2, size=7)
