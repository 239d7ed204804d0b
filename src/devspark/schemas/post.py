"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from devspark.models.visibility import Visibility

MIN_SCORE = -5
MAX_SCORE = 5


class PostCreate(BaseModel):
    """Schema for publishing a post into a channel."""

    title: str = Field(..., min_length=1, max_length=256, description="Post title")
    text: str = Field(..., min_length=1, max_length=20000, description="Post body")
    tag_ids: set[str] = Field(default_factory=set, description="Ids of existing tags")
    visibility: Visibility | None = Field(
        None,
        description="Defaults to the visibility of the channel",
    )


class PostUpdate(BaseModel):
    """Schema for an owner's changes to a post."""

    title: str | None = Field(None, min_length=1, max_length=256)
    text: str | None = Field(None, min_length=1, max_length=20000)
    tag_ids: set[str] | None = None
    visibility: Visibility | None = None


class RatingCreate(BaseModel):
    """Schema for rating a post."""

    value: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE, description="Score to record")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    owner_id: str
    channel_id: str
    title: str
    text: str
    visibility: Visibility
    tag_ids: list[str]
    score: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
