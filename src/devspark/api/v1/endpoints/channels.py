# src/devspark/api/v1/endpoints/channels.py
"""Channel-related endpoints for the DevSpark API."""

from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from devspark.models import Channel, Post
from devspark.repositories.base import Repository
from devspark.schemas.channel import ChannelCreate, ChannelResponse, ChannelUpdate
from devspark.schemas.post import PostCreate, PostResponse
from devspark.services import channel_service
from devspark.services.query import TextFilter, list_channel_posts, list_channels

from ..dependencies import CheckedActorDep, OptionalActorDep, PaginationDep, SessionDep

router = APIRouter(prefix="/channels", tags=["channels"])


@router.get("/", response_model=list[ChannelResponse])
def find_channels(
    db: SessionDep,
    actor: OptionalActorDep,
    pagination: PaginationDep,
    name: str | None = Query(None, description="Exact channel name"),
    pattern: str | None = Query(None, description="Regular expression matched against names"),
) -> list[Channel]:
    """List the channels visible to the caller, optionally filtered by name."""
    text_filter = TextFilter.from_params(name, pattern)
    return list_channels(Repository(db, Channel), actor, text_filter, pagination)


@router.post("/", response_model=ChannelResponse, status_code=status.HTTP_201_CREATED)
def create_channel(
    channel_data: ChannelCreate,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Channel:
    """Create a channel owned by the caller."""
    return channel_service.create_channel(
        db, actor, channel_data.name, channel_data.visibility
    )


@router.get("/{channel_id}", response_model=ChannelResponse)
def get_channel(
    channel_id: str,
    db: SessionDep,
    actor: OptionalActorDep,
) -> Channel:
    """Get a channel by ID; hidden channels read as missing."""
    return channel_service.get_visible_channel(db, actor, channel_id)


@router.patch("/{channel_id}", response_model=ChannelResponse)
def update_channel(
    channel_id: str,
    channel_data: ChannelUpdate,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Channel:
    """Rename a channel or change its visibility."""
    return channel_service.update_channel(
        db,
        actor,
        channel_id,
        name=channel_data.name,
        visibility=channel_data.visibility,
    )


@router.delete(
    "/{channel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_channel(
    channel_id: str,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Response:
    """Delete a channel with all of its posts and their comments."""
    channel_service.remove_channel(db, actor, channel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{channel_id}/posts", response_model=list[PostResponse])
def list_posts(
    channel_id: str,
    db: SessionDep,
    actor: OptionalActorDep,
    pagination: PaginationDep,
    title: str | None = Query(None, description="Exact post title"),
    pattern: str | None = Query(None, description="Regular expression matched against titles"),
) -> list[Post]:
    """List a channel's posts visible to the caller."""
    text_filter = TextFilter.from_params(title, pattern)
    channel = channel_service.get_visible_channel(db, actor, channel_id)
    return list_channel_posts(Repository(db, Post), channel, actor, text_filter, pagination)


@router.post(
    "/{channel_id}/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def publish_post(
    channel_id: str,
    post_data: PostCreate,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Post:
    """Publish a post into a channel the caller owns or manages."""
    return channel_service.publish_post(
        db,
        actor,
        channel_id,
        title=post_data.title,
        text=post_data.text,
        tag_ids=post_data.tag_ids,
        visibility=post_data.visibility,
    )
