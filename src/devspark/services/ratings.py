"""Per-user post ratings with at most one score per user."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devspark.models import Post

logger = logging.getLogger(__name__)


def rate(db: Session, post: Post, user_id: str, value: int) -> bool:
    """Record ``value`` as the user's score for ``post``.

    The insert runs inside a savepoint; when a concurrent request stored a
    score for the same user first, the primary key rejects this one and the
    call reports False as if the user had already rated.

    Returns:
        True if the score was recorded, False if the user already rated.
    """
    if post.has_rated(user_id):
        return False
    try:
        with db.begin_nested():
            post.rate(user_id, value)
    except IntegrityError:
        logger.info("Concurrent rating of post %s by %s rejected", post.id, user_id)
        db.expire(post, ["scores"])
        return False
    return True


def unrate(db: Session, post: Post, user_id: str) -> bool:
    """Remove the user's score for ``post``; True when one existed."""
    removed = post.unrate(user_id)
    if removed:
        db.flush()
    return removed


def score(post: Post) -> int:
    """Return the sum of every score recorded on ``post``."""
    return post.score
