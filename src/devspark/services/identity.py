"""Resolve the acting user of a request from its bearer token."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from devspark.core.security import decode_access_token
from devspark.models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """Identity making a request, fixed for the duration of that request."""

    id: str
    banned: bool = False
    permissions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user: User) -> Actor:
        return cls(
            id=user.id,
            banned=bool(user.banned),
            permissions=frozenset(user.permissions or ()),
        )

    def is_banned(self) -> bool:
        return self.banned

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


def resolve_actor(db: Session, token: str) -> Actor | None:
    """Return the actor a token belongs to, or None if it cannot be resolved.

    Args:
        db: Database session used to load the user row.
        token: Raw bearer token.

    Returns:
        The actor for a valid token naming an existing user, otherwise None.
    """
    subject = decode_access_token(token)
    if subject is None:
        return None
    user = db.get(User, subject)
    if user is None:
        logger.debug("Token subject %s does not name a user", subject)
        return None
    return Actor.from_user(user)
