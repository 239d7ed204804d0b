# src/devspark/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .channels import router as channels_router
from .comments import router as comments_router
from .posts import router as posts_router
from .tags import router as tags_router
from .users import router as users_router

__all__ = [
    "channels_router",
    "comments_router",
    "posts_router",
    "tags_router",
    "users_router",
]
