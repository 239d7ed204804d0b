# src/devspark/api/v1/endpoints/posts.py
"""Post-related endpoints for the DevSpark API."""

from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from devspark.models import Comment, Post, Tag
from devspark.repositories.base import Repository
from devspark.schemas.comment import CommentCreate, CommentResponse
from devspark.schemas.post import PostResponse, PostUpdate, RatingCreate
from devspark.schemas.tag import TagResponse
from devspark.services import post_service
from devspark.services.query import TextFilter, list_posts

from ..dependencies import CheckedActorDep, OptionalActorDep, PaginationDep, SessionDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
def find_posts(
    db: SessionDep,
    actor: OptionalActorDep,
    pagination: PaginationDep,
    title: str | None = Query(None, description="Exact post title"),
    pattern: str | None = Query(None, description="Regular expression matched against titles"),
) -> list[Post]:
    """Search posts across every channel, honoring visibility."""
    text_filter = TextFilter.from_params(title, pattern)
    return list_posts(Repository(db, Post), actor, text_filter, pagination)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    db: SessionDep,
    actor: OptionalActorDep,
) -> Post:
    """Get a post by ID; hidden posts read as missing."""
    return post_service.get_visible_post(db, actor, post_id)


@router.patch("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_data: PostUpdate,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Post:
    """Update the title, text, visibility or tags of the caller's post."""
    return post_service.update_post(
        db,
        actor,
        post_id,
        title=post_data.title,
        text=post_data.text,
        visibility=post_data.visibility,
        tag_ids=post_data.tag_ids,
    )


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_post(
    post_id: str,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Response:
    """Delete a post and its comments."""
    post_service.remove_post(db, actor, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{post_id}/rating",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def rate_post(
    post_id: str,
    rating: RatingCreate,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Post:
    """Rate a post once per user."""
    return post_service.rate_post(db, actor, post_id, rating.value)


@router.delete(
    "/{post_id}/rating",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def unrate_post(
    post_id: str,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Response:
    """Withdraw the caller's rating."""
    post_service.unrate_post(db, actor, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{post_id}/tags", response_model=list[TagResponse])
def get_post_tags(
    post_id: str,
    db: SessionDep,
    actor: OptionalActorDep,
    pagination: PaginationDep,
) -> list[Tag]:
    """List the tags of a visible post."""
    return post_service.list_post_tags(db, actor, post_id, pagination)


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
def get_post_comments(
    post_id: str,
    db: SessionDep,
    actor: OptionalActorDep,
    pagination: PaginationDep,
) -> list[Comment]:
    """List the comments of a visible post."""
    return post_service.list_post_comments(db, actor, post_id, pagination)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    post_id: str,
    comment_data: CommentCreate,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Comment:
    """Comment on a visible post."""
    return post_service.add_comment(db, actor, post_id, comment_data.body)
