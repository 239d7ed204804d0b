"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class ActorResponse(BaseModel):
    """The resolved identity of the caller."""

    id: str
    banned: bool
    permissions: list[str]

    model_config = ConfigDict(from_attributes=True)
