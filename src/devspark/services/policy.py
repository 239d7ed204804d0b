"""Visibility and access decisions for channels, posts and comments.

These are pure functions of the actor and the resource; callers turn a
failed visibility check into not-found and a failed access check into
forbidden.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import or_
from sqlalchemy.sql import ColumnElement

from devspark.core.permissions import IGNORE_VISIBILITY
from devspark.models import Visibility, VisibleResource
from devspark.services.identity import Actor


def ignores_visibility(actor: Actor | None) -> bool:
    """Return True for an unbanned actor holding the ignore-visibility grant."""
    return (
        actor is not None
        and not actor.is_banned()
        and actor.has_permission(IGNORE_VISIBILITY)
    )


def can_see(actor: Actor | None, resource: VisibleResource) -> bool:
    """Decide whether ``actor`` may read ``resource``."""
    if ignores_visibility(actor):
        return True
    if actor is not None and resource.is_owned_by(actor.id):
        return True
    return resource.is_visible


def can_mutate(
    actor: Actor,
    resource: Any,
    elevated: str | None = None,
) -> bool:
    """Decide whether ``actor`` may change or delete ``resource``.

    Args:
        actor: Authenticated actor.
        resource: Anything exposing ``is_owned_by``.
        elevated: Permission that grants the right regardless of ownership.
    """
    if resource.is_owned_by(actor.id):
        return True
    return elevated is not None and actor.has_permission(elevated)


def bypasses_visibility(actor: Actor | None, scope: VisibleResource | None = None) -> bool:
    """Compute the per-request ``all`` flag of a listing.

    True when the actor ignores visibility, or, for listings scoped to a
    parent such as a channel's posts, when the unbanned actor owns that parent.
    """
    if ignores_visibility(actor):
        return True
    return (
        actor is not None
        and not actor.is_banned()
        and scope is not None
        and scope.is_owned_by(actor.id)
    )


def visibility_clause(model: Any, actor: Actor | None) -> ColumnElement[bool]:
    """SQL condition keeping public rows plus the rows ``actor`` owns."""
    public = model.visibility == Visibility.PUBLIC
    if actor is None:
        return public
    return or_(public, model.owner_id == actor.id)
