# src/devspark/api/v1/endpoints/users.py
"""User-related endpoints for the DevSpark API."""

from fastapi import APIRouter

from devspark.schemas.user import ActorResponse

from ..dependencies import CurrentActorDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ActorResponse)
def read_me(actor: CurrentActorDep) -> ActorResponse:
    """Return the caller's identity, ban flag and permissions."""
    return ActorResponse(
        id=actor.id,
        banned=actor.is_banned(),
        permissions=sorted(actor.permissions),
    )
