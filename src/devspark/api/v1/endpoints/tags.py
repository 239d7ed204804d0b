# src/devspark/api/v1/endpoints/tags.py
"""Tag-related endpoints for the DevSpark API."""

from fastapi import APIRouter, Query, status

from devspark.models import Tag
from devspark.repositories.base import Repository
from devspark.schemas.tag import TagCreate, TagResponse
from devspark.services import tag_service
from devspark.services.query import TextFilter, list_tags

from ..dependencies import CheckedActorDep, PaginationDep, SessionDep

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=list[TagResponse])
def find_tags(
    db: SessionDep,
    pagination: PaginationDep,
    name: str | None = Query(None, description="Exact tag name"),
    pattern: str | None = Query(None, description="Regular expression matched against names"),
) -> list[Tag]:
    """List tags, optionally filtered by name."""
    text_filter = TextFilter.from_params(name, pattern)
    return list_tags(Repository(db, Tag), text_filter, pagination)


@router.get("/{tag_id}", response_model=TagResponse)
def get_tag(tag_id: str, db: SessionDep) -> Tag:
    """Get a tag by ID."""
    return tag_service.get_tag(db, tag_id)


@router.post("/", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
def create_tag(tag_data: TagCreate, actor: CheckedActorDep, db: SessionDep) -> Tag:
    """Create a tag; requires the tag-management permission."""
    return tag_service.create_tag(db, actor, tag_data.name)
