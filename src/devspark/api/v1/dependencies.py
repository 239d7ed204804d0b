"""Shared API dependencies for authentication, sessions and pagination."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from devspark.db.session import get_db
from devspark.repositories.base import Pagination
from devspark.services.identity import Actor, resolve_actor

# HTTP Bearer scheme; anonymous callers are allowed on read endpoints.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_optional_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> Actor | None:
    """Resolve the caller from an optional bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        The actor for the token, or None for anonymous callers

    Raises:
        HTTPException: If a token was sent but does not resolve to a user
    """
    if credentials is None:
        return None
    actor = resolve_actor(db, credentials.credentials)
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor


OptionalActorDep = Annotated[Actor | None, Depends(get_optional_actor)]


def get_current_actor(actor: OptionalActorDep) -> Actor:
    """Require an authenticated caller."""
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor


CurrentActorDep = Annotated[Actor, Depends(get_current_actor)]


def get_checked_actor(actor: CurrentActorDep) -> Actor:
    """Require an authenticated caller that is not banned."""
    if actor.is_banned():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is banned",
        )
    return actor


CheckedActorDep = Annotated[Actor, Depends(get_checked_actor)]


def get_pagination(
    page: int | None = Query(None, description="Zero-based page number"),
    size: int | None = Query(None, description="Number of items per page"),
) -> Pagination:
    """Validate the page window before any query runs."""
    return Pagination.from_params(page, size)


PaginationDep = Annotated[Pagination, Depends(get_pagination)]
