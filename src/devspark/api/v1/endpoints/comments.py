# src/devspark/api/v1/endpoints/comments.py
"""Comment-related endpoints for the DevSpark API."""

from fastapi import APIRouter, Response, status

from devspark.models import Comment
from devspark.schemas.comment import CommentResponse, CommentUpdate
from devspark.services import comment_service

from ..dependencies import CheckedActorDep, OptionalActorDep, SessionDep

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{comment_id}", response_model=CommentResponse)
def get_comment(comment_id: str, db: SessionDep, actor: OptionalActorDep) -> Comment:
    """Get a comment whose post is visible to the caller."""
    return comment_service.get_visible_comment(db, actor, comment_id)


@router.patch("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: str,
    comment_data: CommentUpdate,
    actor: CheckedActorDep,
    db: SessionDep,
) -> Comment:
    """Edit the body of the caller's comment."""
    return comment_service.update_comment(db, actor, comment_id, comment_data.body)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_comment(comment_id: str, actor: CheckedActorDep, db: SessionDep) -> Response:
    """Delete a comment."""
    comment_service.remove_comment(db, actor, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
