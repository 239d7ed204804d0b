"""Tag lookup, creation and existence checks."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devspark.core.permissions import MANAGE_TAGS
from devspark.models import Tag
from devspark.repositories.base import Pagination, Repository
from devspark.services.errors import ConflictError, ForbiddenError, NotFoundError, ReferentialError
from devspark.services.identity import Actor

_FIRST = Pagination(page=0, size=1)


def ensure_tags_exist(db: Session, tag_ids: Iterable[str]) -> set[str]:
    """Return ``tag_ids`` as a set once every id is known to exist.

    Raises:
        ReferentialError: If any id does not name a stored tag.
    """
    wanted = set(tag_ids)
    if not Repository(db, Tag).exists(wanted):
        raise ReferentialError()
    return wanted


def get_tag(db: Session, tag_id: str) -> Tag:
    tag = Repository(db, Tag).get(tag_id)
    if tag is None:
        raise NotFoundError("Tag not found")
    return tag


def create_tag(db: Session, actor: Actor, name: str) -> Tag:
    """Create a tag; requires the tag-management permission."""
    if not actor.has_permission(MANAGE_TAGS):
        raise ForbiddenError("Tag management permission required")
    repo = Repository(db, Tag)
    if repo.find_by_field("name", name, _FIRST):
        raise ConflictError("Tag name already exists")
    try:
        tag = repo.put(Tag(name=name))
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Tag name already exists") from exc
    db.refresh(tag)
    return tag
