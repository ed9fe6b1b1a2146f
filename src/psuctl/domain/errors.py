"""Error taxonomy for endpoint and stack resolution.

Every error carries a stable ``code`` that the service layer copies into
``ServiceError.code``.  Transport failures are not wrapped here: they
surface as ``httpx.HTTPError`` and are classified by the service layer.
"""

from __future__ import annotations

from typing import Any


class PsuError(Exception):
    """Base class for all psuctl domain errors."""

    code: str = "ERROR"
    default_message: str = "Unexpected error"

    def __init__(self, message: str | None = None, **detail: Any) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.detail = detail


# --- NotFound ---


class NotFoundError(PsuError):
    """A named entity or nested value is not among the known candidates."""

    code = "NOT_FOUND"
    default_message = "Not found"


class EndpointNotFoundError(NotFoundError):
    default_message = "Endpoint not found"


class StackNotFoundError(NotFoundError):
    default_message = "Stack not found"


class StackClusterNotFoundError(NotFoundError):
    """The endpoint is not part of a swarm cluster."""

    default_message = "Stack cluster not found"


class ValueNotFoundError(NotFoundError):
    """A key along a nested path is absent."""

    default_message = "Value not found"


# --- Default endpoint policy ---


class SeveralEndpointsAvailableError(PsuError):
    """More than one endpoint exists, so there is no default."""

    code = "AMBIGUOUS_DEFAULT"
    default_message = "Several endpoints available"


class NoEndpointsAvailableError(PsuError):
    code = "EMPTY_RESULT"
    default_message = "No endpoints available"


# --- Nested structures ---


class ShapeMismatchError(PsuError):
    """A nested path traversal hit a non-mapping before the path ended."""

    code = "SHAPE_MISMATCH"
    default_message = "Value is not a mapping"
