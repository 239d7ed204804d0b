"""Tag-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    """Schema for creating a tag."""

    name: str = Field(..., min_length=1, max_length=64)


class TagResponse(BaseModel):
    """Schema for tag information returned by the API."""

    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)
