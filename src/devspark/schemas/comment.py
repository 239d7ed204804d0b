"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    body: str = Field(..., min_length=1, max_length=5000)


class CommentUpdate(BaseModel):
    """Schema for editing a comment."""

    body: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: str
    post_id: str
    owner_id: str
    body: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
