"""Post reads, owner updates, ratings, comments and deletion."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from devspark.core.permissions import MANAGE_CHANNELS
from devspark.db.session import utcnow
from devspark.models import Comment, Post, Tag, Visibility
from devspark.repositories.base import DeletePredicate, Pagination, Repository
from devspark.services import ratings
from devspark.services.cascade import CascadeCoordinator
from devspark.services.errors import ConflictError, NotFoundError, ValidationError
from devspark.services.guards import refuse_delete, require_mutable, require_visible
from devspark.services.identity import Actor
from devspark.services.tag_service import ensure_tags_exist


def get_visible_post(db: Session, actor: Actor | None, post_id: str) -> Post:
    """Return a post the actor may see.

    Raises:
        NotFoundError: If the post does not exist or is hidden.
    """
    return require_visible(actor, Repository(db, Post).get(post_id), "Post")


def update_post(
    db: Session,
    actor: Actor,
    post_id: str,
    *,
    title: str | None = None,
    text: str | None = None,
    visibility: Visibility | None = None,
    tag_ids: Iterable[str] | None = None,
) -> Post:
    """Apply an owner's changes to a post.

    Raises:
        ValidationError: If no field is supplied.
        NotFoundError: If the post is missing or hidden.
        ForbiddenError: If the actor does not own the post.
        ReferentialError: If a tag id does not exist.
    """
    if title is None and text is None and visibility is None and tag_ids is None:
        raise ValidationError("Nothing to update")
    post = get_visible_post(db, actor, post_id)
    require_mutable(actor, post, "Post")
    if tag_ids is not None:
        post.set_tag_ids(ensure_tags_exist(db, tag_ids))
    values: dict[str, object] = {"updated_at": utcnow()}
    if title is not None:
        values["title"] = title
    if text is not None:
        values["text"] = text
    if visibility is not None:
        values["visibility"] = visibility
    repo = Repository(db, Post)
    repo.put(post)
    repo.update(post.id, values)
    db.commit()
    db.refresh(post)
    return post


def remove_post(db: Session, actor: Actor, post_id: str) -> None:
    """Delete a post together with its comments, scores and tag links.

    Raises:
        NotFoundError: If no such post is visible to the actor.
        ForbiddenError: If the post is visible but not the actor's.
        CascadeFailure: If cleaning up the comments failed.
    """
    if actor.has_permission(MANAGE_CHANNELS):
        predicate = DeletePredicate.by_id(post_id)
    else:
        predicate = DeletePredicate.by_id_and_owner(post_id, actor.id)
    if CascadeCoordinator.for_session(db).delete_post(predicate):
        return
    refuse_delete(actor, Repository(db, Post).get(post_id), "Post")


def rate_post(db: Session, actor: Actor, post_id: str, value: int) -> Post:
    """Record the actor's score on a visible post.

    Raises:
        ConflictError: If the actor already rated the post.
    """
    post = get_visible_post(db, actor, post_id)
    if not ratings.rate(db, post, actor.id, value):
        raise ConflictError("Post already rated")
    db.commit()
    db.refresh(post)
    return post


def unrate_post(db: Session, actor: Actor, post_id: str) -> Post:
    """Withdraw the actor's score from a visible post.

    Raises:
        NotFoundError: If the actor has not rated the post.
    """
    post = get_visible_post(db, actor, post_id)
    if not ratings.unrate(db, post, actor.id):
        raise NotFoundError("Rating not found")
    db.commit()
    db.refresh(post)
    return post


def list_post_tags(
    db: Session,
    actor: Actor | None,
    post_id: str,
    pagination: Pagination,
) -> list[Tag]:
    post = get_visible_post(db, actor, post_id)
    return Repository(db, Tag).get_all(post.tag_ids, pagination)


def list_post_comments(
    db: Session,
    actor: Actor | None,
    post_id: str,
    pagination: Pagination,
) -> list[Comment]:
    post = get_visible_post(db, actor, post_id)
    return Repository(db, Comment).find_by_field("post_id", post.id, pagination)


def add_comment(db: Session, actor: Actor, post_id: str, body: str) -> Comment:
    """Attach a comment by the actor to a visible post."""
    post = get_visible_post(db, actor, post_id)
    comment = Comment(post_id=post.id, owner_id=actor.id, body=body)
    Repository(db, Comment).put(comment)
    db.commit()
    db.refresh(comment)
    return comment
