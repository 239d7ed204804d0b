"""Multi-collection deletes for channels, posts and comments.

Deleting a channel removes its posts; deleting a post removes its comments,
scores and tag links. The parent row is removed first with a single
predicate so a refused or lost delete never touches children. Child cleanup
runs after the parent delete has been committed; if it fails the parent
stays deleted and :meth:`CascadeCoordinator.sweep_orphans` removes what was
left behind.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from devspark.models import Channel, Comment, Post, PostScore, PostTag
from devspark.repositories.base import DeletePredicate, Repository
from devspark.services.errors import CascadeFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepReport:
    """Row counts removed by an orphan sweep."""

    posts: int = 0
    comments: int = 0
    scores: int = 0
    tag_links: int = 0


class CascadeCoordinator:
    """Ordered parent-then-children deletes over the content repositories."""

    def __init__(
        self,
        db: Session,
        channels: Repository[Channel],
        posts: Repository[Post],
        comments: Repository[Comment],
        scores: Repository[PostScore],
        tag_links: Repository[PostTag],
    ) -> None:
        self.db = db
        self.channels = channels
        self.posts = posts
        self.comments = comments
        self.scores = scores
        self.tag_links = tag_links

    @classmethod
    def for_session(cls, db: Session) -> CascadeCoordinator:
        """Build a coordinator whose repositories share ``db``."""
        return cls(
            db,
            channels=Repository(db, Channel),
            posts=Repository(db, Post),
            comments=Repository(db, Comment),
            scores=Repository(db, PostScore),
            tag_links=Repository(db, PostTag),
        )

    def _purge_post_children(self, post_ids: Collection[str]) -> None:
        self.comments.delete_in("post_id", post_ids)
        self.scores.delete_in("post_id", post_ids)
        self.tag_links.delete_in("post_id", post_ids)

    def _run_children(self, description: str, step: Callable[[], None]) -> None:
        try:
            step()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Cascade cleanup failed for %s", description, exc_info=True)
            raise CascadeFailure(f"Cleanup after deleting {description} failed") from exc

    def delete_channel(self, predicate: DeletePredicate) -> bool:
        """Delete a channel, then its posts and everything attached to them.

        Returns:
            False when no channel matched ``predicate``; nothing else is touched.

        Raises:
            CascadeFailure: If removing the children fails after the channel
                row was deleted.
        """
        if not self.channels.delete(predicate):
            return False
        self.db.commit()
        channel_id = predicate.resource_id
        logger.info("Deleted channel %s (forced=%s)", channel_id, predicate.forced)

        def remove_posts() -> None:
            post_ids = self.posts.ids_where("channel_id", channel_id)
            self._purge_post_children(post_ids)
            removed = self.posts.delete_all("channel_id", channel_id)
            logger.info("Removed %d posts of channel %s", removed, channel_id)

        self._run_children(f"channel {channel_id}", remove_posts)
        return True

    def delete_post(self, predicate: DeletePredicate) -> bool:
        """Delete a post, then its comments, scores and tag links.

        Returns:
            False when no post matched ``predicate``; nothing else is touched.

        Raises:
            CascadeFailure: If removing the children fails after the post row
                was deleted.
        """
        if not self.posts.delete(predicate):
            return False
        self.db.commit()
        post_id = predicate.resource_id
        logger.info("Deleted post %s (forced=%s)", post_id, predicate.forced)
        self._run_children(f"post {post_id}", lambda: self._purge_post_children([post_id]))
        return True

    def delete_comment(self, predicate: DeletePredicate) -> bool:
        """Delete a single comment; False when none matched."""
        if not self.comments.delete(predicate):
            return False
        self.db.commit()
        logger.info("Deleted comment %s (forced=%s)", predicate.resource_id, predicate.forced)
        return True

    def _dangling(self, column: Any, parent_ids: Any) -> list[str]:
        return list(
            self.db.scalars(select(column).where(column.not_in(parent_ids)).distinct())
        )

    def sweep_orphans(self) -> SweepReport:
        """Remove posts of missing channels and children of missing posts."""
        orphan_posts = self._dangling(Post.channel_id, select(Channel.id))
        posts_removed = self.posts.delete_in("channel_id", orphan_posts)
        live_posts = select(Post.id)
        report = SweepReport(
            posts=posts_removed,
            comments=self.comments.delete_in(
                "post_id", self._dangling(Comment.post_id, live_posts)
            ),
            scores=self.scores.delete_in(
                "post_id", self._dangling(PostScore.post_id, live_posts)
            ),
            tag_links=self.tag_links.delete_in(
                "post_id", self._dangling(PostTag.post_id, live_posts)
            ),
        )
        self.db.commit()
        logger.info(
            "Orphan sweep removed %d posts, %d comments, %d scores, %d tag links",
            report.posts,
            report.comments,
            report.scores,
            report.tag_links,
        )
        return report
