"""Name/title search and paginated listings filtered by visibility."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import DBAPIError
from sqlalchemy.sql import ColumnElement

from devspark.core.settings import settings
from devspark.models import Channel, Post, Tag
from devspark.repositories.base import Pagination, Repository
from devspark.services.errors import ValidationError
from devspark.services.identity import Actor
from devspark.services.policy import bypasses_visibility, visibility_clause

logger = logging.getLogger(__name__)


def compile_pattern(raw: str) -> re.Pattern[str]:
    """Compile a caller-supplied regular expression.

    Raises:
        ValidationError: If the expression is too long or not valid syntax.
    """
    if len(raw) > settings.max_pattern_length:
        raise ValidationError(
            f"Pattern must be at most {settings.max_pattern_length} characters"
        )
    try:
        return re.compile(raw)
    except re.error as exc:
        logger.debug("Rejected search pattern %r: %s", raw, exc)
        raise ValidationError(f"Invalid pattern: {exc}") from exc


@dataclass(frozen=True)
class TextFilter:
    """One of exact match, pattern match or no constraint on a text column."""

    exact: str | None = None
    pattern: re.Pattern[str] | None = None

    @classmethod
    def from_params(cls, exact: str | None, pattern: str | None) -> TextFilter:
        # An exact value wins when a caller sends both.
        if exact is not None:
            return cls(exact=exact)
        if pattern is not None:
            return cls(pattern=compile_pattern(pattern))
        return cls()

    def clause(self, column: Any) -> ColumnElement[bool] | None:
        """Return the SQL condition for ``column`` or None when unfiltered."""
        if self.exact is not None:
            return column == self.exact
        if self.pattern is not None:
            return column.regexp_match(self.pattern.pattern)
        return None


def _find(
    repo: Repository[Any],
    text_filter: TextFilter,
    criteria: list[ColumnElement[bool]],
    pagination: Pagination,
) -> list[Any]:
    """Run a listing, reporting a pattern the database refuses as bad input.

    The database evaluates patterns in its own dialect (POSIX on
    PostgreSQL). A pattern that compiled with ``re`` but fails there raises
    ValidationError after the transaction is rolled back.
    """
    try:
        return repo.find(*criteria, pagination=pagination)
    except DBAPIError as exc:
        if text_filter.pattern is None:
            raise
        repo.db.rollback()
        logger.debug(
            "Database rejected search pattern %r: %s", text_filter.pattern.pattern, exc.orig
        )
        raise ValidationError("Invalid pattern: not supported by the database") from exc


def _criteria(
    model: Any,
    column: Any,
    text_filter: TextFilter,
    actor: Actor | None,
    show_all: bool,
) -> list[ColumnElement[bool]]:
    criteria: list[ColumnElement[bool]] = []
    text_clause = text_filter.clause(column)
    if text_clause is not None:
        criteria.append(text_clause)
    if not show_all:
        criteria.append(visibility_clause(model, actor))
    return criteria


def list_channels(
    repo: Repository[Channel],
    actor: Actor | None,
    text_filter: TextFilter,
    pagination: Pagination,
) -> list[Channel]:
    """Return one page of channels the actor may see, filtered by name."""
    show_all = bypasses_visibility(actor)
    criteria = _criteria(Channel, Channel.name, text_filter, actor, show_all)
    return _find(repo, text_filter, criteria, pagination)


def list_channel_posts(
    repo: Repository[Post],
    channel: Channel,
    actor: Actor | None,
    text_filter: TextFilter,
    pagination: Pagination,
) -> list[Post]:
    """Return one page of a channel's posts the actor may see, filtered by title.

    The channel owner sees every post of the channel.
    """
    show_all = bypasses_visibility(actor, scope=channel)
    criteria = _criteria(Post, Post.title, text_filter, actor, show_all)
    criteria.insert(0, Post.channel_id == channel.id)
    return _find(repo, text_filter, criteria, pagination)


def list_posts(
    repo: Repository[Post],
    actor: Actor | None,
    text_filter: TextFilter,
    pagination: Pagination,
) -> list[Post]:
    """Return one page of posts across all channels, filtered by title."""
    show_all = bypasses_visibility(actor)
    criteria = _criteria(Post, Post.title, text_filter, actor, show_all)
    return _find(repo, text_filter, criteria, pagination)


def list_tags(
    repo: Repository[Tag],
    text_filter: TextFilter,
    pagination: Pagination,
) -> list[Tag]:
    """Return one page of tags filtered by name."""
    text_clause = text_filter.clause(Tag.name)
    criteria = [] if text_clause is None else [text_clause]
    return _find(repo, text_filter, criteria, pagination)
