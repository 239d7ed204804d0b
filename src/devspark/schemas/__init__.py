# src/devspark/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .channel import ChannelCreate, ChannelResponse, ChannelUpdate
from .comment import CommentCreate, CommentResponse, CommentUpdate
from .post import PostCreate, PostResponse, PostUpdate, RatingCreate
from .tag import TagCreate, TagResponse
from .user import ActorResponse

__all__ = [
    "ActorResponse",
    "ChannelCreate", "ChannelResponse", "ChannelUpdate",
    "CommentCreate", "CommentResponse", "CommentUpdate",
    "PostCreate", "PostResponse", "PostUpdate", "RatingCreate",
    "TagCreate", "TagResponse",
]
