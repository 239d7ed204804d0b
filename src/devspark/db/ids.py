# src/devspark/db/ids.py
"""Identifier generation for database models."""

from uuid import uuid4


def new_id() -> str:
    """Return a fresh random identifier as a canonical UUID string."""
    return str(uuid4())
