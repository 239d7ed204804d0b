"""Comment edits and deletion, gated by the visibility of the parent post."""
from __future__ import annotations

from sqlalchemy.orm import Session

from devspark.core.permissions import MANAGE_CHANNELS
from devspark.db.session import utcnow
from devspark.models import Comment, Post
from devspark.repositories.base import DeletePredicate, Repository
from devspark.services.cascade import CascadeCoordinator
from devspark.services.errors import ForbiddenError, NotFoundError
from devspark.services.guards import require_mutable, require_visible
from devspark.services.identity import Actor


def get_visible_comment(db: Session, actor: Actor | None, comment_id: str) -> Comment:
    """Return a comment whose post the actor may see.

    Raises:
        NotFoundError: If the comment is missing or its post is hidden.
    """
    comment = Repository(db, Comment).get(comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    post = Repository(db, Post).get(comment.post_id)
    try:
        require_visible(actor, post, "Post")
    except NotFoundError as exc:
        raise NotFoundError("Comment not found") from exc
    return comment


def update_comment(db: Session, actor: Actor, comment_id: str, body: str) -> Comment:
    """Replace the body of the actor's own comment."""
    comment = get_visible_comment(db, actor, comment_id)
    require_mutable(actor, comment, "Comment")
    Repository(db, Comment).update(comment.id, {"body": body, "updated_at": utcnow()})
    db.commit()
    db.refresh(comment)
    return comment


def remove_comment(db: Session, actor: Actor, comment_id: str) -> None:
    """Delete a comment owned by the actor, or any comment for channel managers.

    Raises:
        NotFoundError: If the comment is missing or its post is hidden.
        ForbiddenError: If the comment is visible but not the actor's.
    """
    if actor.has_permission(MANAGE_CHANNELS):
        predicate = DeletePredicate.by_id(comment_id)
    else:
        predicate = DeletePredicate.by_id_and_owner(comment_id, actor.id)
    if CascadeCoordinator.for_session(db).delete_comment(predicate):
        return
    get_visible_comment(db, actor, comment_id)
    raise ForbiddenError("You cannot delete this comment")
