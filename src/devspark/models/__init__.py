# src/devspark/models/__init__.py
"""SQLAlchemy models for the DevSpark application."""

from .channel import Channel
from .comment import Comment
from .post import Post, PostScore, PostTag
from .tag import Tag
from .user import User
from .visibility import Visibility, VisibleResource

__all__ = [
    "Channel",
    "Comment",
    "Post", "PostScore", "PostTag",
    "Tag",
    "User",
    "Visibility", "VisibleResource",
]
