"""
Error taxonomy shared by services and routers.

Every error carries the HTTP status it maps to; the app's exception handlers
render them as ``{"error": message, "details": [...]}``.
"""

from __future__ import annotations

from typing import Any, Optional


class StorefrontError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[list[Any]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict:
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(StorefrontError):
    status_code = 401
    default_message = "Authentication required"


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ConflictError(StorefrontError):
    status_code = 409
    default_message = "Conflict"


class DuplicateUsernameError(ConflictError):
    default_message = "Username already exists"


class CategoryInUseError(ConflictError):
    default_message = "Category has products and cannot be deleted"


class RateLimitError(StorefrontError):
    status_code = 429
    default_message = "Too many login attempts, please try again later."


class InternalError(StorefrontError):
    pass
