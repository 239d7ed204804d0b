# src/devspark/services/__init__.py
"""Business logic services for the DevSpark application."""

from .errors import (
    CascadeFailure,
    ConflictError,
    ContentError,
    ForbiddenError,
    NotFoundError,
    ReferentialError,
    ValidationError,
)

__all__ = [
    "CascadeFailure",
    "ConflictError",
    "ContentError",
    "ForbiddenError",
    "NotFoundError",
    "ReferentialError",
    "ValidationError",
]
