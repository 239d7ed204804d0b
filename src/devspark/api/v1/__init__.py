# src/devspark/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    channels_router,
    comments_router,
    posts_router,
    tags_router,
    users_router,
)

__all__ = [
    "channels_router",
    "comments_router",
    "posts_router",
    "tags_router",
    "users_router",
]
