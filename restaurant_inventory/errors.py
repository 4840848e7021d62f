from __future__ import annotations

from typing import Dict, Optional


class InventoryError(Exception):
    """Base error for the inventory service; carries the HTTP status it maps to."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None) -> None:
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class AuthenticationError(InventoryError):
    status_code = 401
    default_message = "Not authenticated"


class AuthorizationError(InventoryError):
    status_code = 403
    default_message = "Unauthorized. Admin access required."


class ValidationError(InventoryError):
    status_code = 400
    default_message = "Invalid input"


class NotFoundError(InventoryError):
    status_code = 404
    default_message = "Not found"


class RateLimitExceeded(InventoryError):
    status_code = 429
    default_message = "Too Many Requests"


class StorageError(InventoryError):
    """Database failure. The message shown to clients stays generic."""

    status_code = 500
    default_message = "Internal server error"


__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "InventoryError",
    "NotFoundError",
    "RateLimitExceeded",
    "StorageError",
    "ValidationError",
]
