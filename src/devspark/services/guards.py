"""Turn policy decisions into not-found and forbidden outcomes."""
from __future__ import annotations

from typing import Any, TypeVar

from devspark.models import VisibleResource
from devspark.services.errors import ForbiddenError, NotFoundError
from devspark.services.identity import Actor
from devspark.services.policy import can_mutate, can_see

ResourceT = TypeVar("ResourceT", bound=VisibleResource)


def require_visible(actor: Actor | None, resource: ResourceT | None, label: str) -> ResourceT:
    """Return ``resource`` if the actor may see it, else raise not-found."""
    if resource is None or not can_see(actor, resource):
        raise NotFoundError(f"{label} not found")
    return resource


def require_mutable(actor: Actor, resource: Any, label: str, elevated: str | None = None) -> None:
    """Raise forbidden unless the actor may change ``resource``."""
    if not can_mutate(actor, resource, elevated):
        raise ForbiddenError(f"You cannot modify this {label.lower()}")


def refuse_delete(actor: Actor, resource: VisibleResource | None, label: str) -> None:
    """Explain why a delete predicate matched no row.

    A missing or hidden resource reads as not-found, a visible one as
    forbidden. Always raises.
    """
    require_visible(actor, resource, label)
    raise ForbiddenError(f"You cannot delete this {label.lower()}")
