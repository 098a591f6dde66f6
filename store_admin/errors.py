"""Errors raised by the admin handlers and the field editor.

Every error carries the HTTP status it maps to and the message shown to the
caller; ``main`` turns them into ``{"detail": message}`` responses.
"""

from typing import Optional


class AdminError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(AdminError):
    status_code = 401
    default_message = "Unauthorized"


class MissingField(AdminError):
    status_code = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing {field}")


class InvalidShape(AdminError):
    status_code = 400

    def __init__(self, field: str, reason: str = "is invalid"):
        self.field = field
        super().__init__(f"Invalid {field}: {reason}")


class NotFound(AdminError):
    status_code = 404
    default_message = "Not found"


class ReferentialConflict(AdminError):
    status_code = 409
    default_message = "Entity is still referenced"


class InternalError(AdminError):
    status_code = 500


class IndexOutOfRange(IndexError):
    """Field editor position that does not exist in the current list."""

    def __init__(self, what: str, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"{what} index {index} out of range (size {size})")
