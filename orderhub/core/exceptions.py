"""
Domain Error Hierarchy

Every failure the order engine reports to a caller is one of these.
Each carries the HTTP status it maps to so the API layer can translate
without knowing which component raised it.

Version: 1.0.0
"""

from typing import Optional


class OrderingError(Exception):
    """Base class for all errors raised by the order engine."""

    status_code: int = 500
    default_message: str = "Order engine error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to the JSON error envelope."""
        return {"success": False, "message": self.message}


class ValidationError(OrderingError):
    """Malformed or incomplete input. Nothing was applied."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: list[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message, "errors": self.errors}


class NotFoundError(OrderingError):
    """Unknown order or menu item id."""

    status_code = 404
    default_message = "Not found"


class InvalidTransitionError(OrderingError):
    """Status value outside the closed lifecycle enum."""

    status_code = 400
    default_message = "Invalid status"


class InternalError(OrderingError):
    """Unexpected fault inside a handler."""

    status_code = 500
    default_message = "Internal server error"
