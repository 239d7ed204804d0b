# src/devspark/models/post.py
"""SQLAlchemy models for posts, their ratings and their tag links."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, attribute_keyed_dict, mapped_column, relationship

from devspark.db.ids import new_id
from devspark.db.session import Base, utcnow

from .channel import VISIBILITY_TYPE
from .visibility import Visibility


class PostScore(Base):
    """Score a single user gave to a post."""

    __tablename__ = "post_score"

    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Composite primary key prevents a second score from the same user.
    value: Mapped[int] = mapped_column(Integer, nullable=False)


class PostTag(Base):
    """Link between a post and a tag it carries."""

    __tablename__ = "post_tag"
    __table_args__ = (Index("ix_post_tag_tag_id", "tag_id"),)

    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tag.id", ondelete="CASCADE"),
        primary_key=True,
    )


class Post(Base):
    """Content published into a channel.

    A post keeps one owner, stays in the channel it was published to and
    carries a ledger of per-user scores.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_channel_id", "channel_id"),
        Index("ix_post_owner_id", "owner_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("app_user.id"), nullable=False
    )
    channel_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("channel.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    visibility: Mapped[Visibility] = mapped_column(
        VISIBILITY_TYPE, nullable=False, default=Visibility.PUBLIC
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    scores: Mapped[dict[str, PostScore]] = relationship(
        collection_class=attribute_keyed_dict("user_id"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    tag_links: Mapped[list[PostTag]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def is_owned_by(self, user_id: str | None) -> bool:
        """Return True when ``user_id`` is the post owner."""
        return user_id is not None and self.owner_id == user_id

    @property
    def is_visible(self) -> bool:
        """Return True when the post is public."""
        return self.visibility == Visibility.PUBLIC

    @property
    def tag_ids(self) -> list[str]:
        """Return the ids of the tags on this post in a stable order."""
        return sorted(link.tag_id for link in self.tag_links)

    def set_tag_ids(self, tag_ids: Iterable[str]) -> None:
        """Replace the post's tags, keeping links that are still wanted."""
        wanted = set(tag_ids)
        kept = [link for link in self.tag_links if link.tag_id in wanted]
        present = {link.tag_id for link in kept}
        kept.extend(PostTag(tag_id=tag_id) for tag_id in sorted(wanted - present))
        self.tag_links = kept

    def has_rated(self, user_id: str) -> bool:
        """Return True when ``user_id`` already scored this post."""
        return user_id in self.scores

    def rate(self, user_id: str, value: int) -> bool:
        """Record a score unless the user already rated the post."""
        if user_id in self.scores:
            return False
        self.scores[user_id] = PostScore(user_id=user_id, value=value)
        return True

    def unrate(self, user_id: str) -> bool:
        """Drop the user's score, returning whether one existed."""
        return self.scores.pop(user_id, None) is not None

    @property
    def score(self) -> int:
        """Sum of every recorded score."""
        return sum(entry.value for entry in self.scores.values())
