"""Domain errors raised by the publishing services.

Each error carries the HTTP status the API layer answers with; the
exception handler registered in ``devspark.main`` performs the mapping.
"""
from __future__ import annotations

from fastapi import status


class ContentError(Exception):
    """Base class for errors recovered at the boundary of a request."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ContentError):
    """Malformed filter, pagination or body detected before any storage call."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class NotFoundError(ContentError):
    """Resource is absent or hidden from the caller; the two are indistinguishable."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ForbiddenError(ContentError):
    """Resource is visible but the requested mutation is denied."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class ConflictError(ContentError):
    """Request conflicts with the current state of a resource."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class ReferentialError(ConflictError):
    """A post references tag ids that do not all exist."""

    default_detail = "Invalid tag ids"


class CascadeFailure(ContentError):
    """A later step of a multi-step delete failed after the parent was removed."""

    default_detail = "Cascade delete did not complete"
