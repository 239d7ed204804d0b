"""Channel-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from devspark.models.visibility import Visibility


class ChannelCreate(BaseModel):
    """Schema for creating a new channel."""

    name: str = Field(..., min_length=1, max_length=128, description="Display name")
    visibility: Visibility | None = Field(None, description="Defaults to public")


class ChannelUpdate(BaseModel):
    """Schema for renaming a channel or changing its visibility."""

    name: str | None = Field(None, min_length=1, max_length=128)
    visibility: Visibility | None = None


class ChannelResponse(BaseModel):
    """Schema for channel information returned by the API."""

    id: str
    owner_id: str
    name: str
    visibility: Visibility
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
