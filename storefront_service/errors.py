"""Error taxonomy for the storefront service.

Each error carries the HTTP status it maps to and a message that is safe to
return to the client. ``StoreError`` keeps the underlying driver failure in
``detail`` for the server-side log only.
"""

from http import HTTPStatus
from typing import Optional


class StorefrontError(Exception):
    """Base class for errors surfaced by the storefront components."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequest(StorefrontError):
    """Malformed or missing input."""

    status_code = HTTPStatus.BAD_REQUEST


class NotFound(StorefrontError):
    """A referenced product does not exist."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, identifier: str):
        super().__init__(f"Product with _id {identifier} not found")
        self.identifier = identifier


class InsufficientStock(StorefrontError):
    """A product does not have enough availability to satisfy demand."""

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, identifier: str, requested: int, available: int):
        super().__init__(f"not enough availability for product with _id {identifier}")
        self.identifier = identifier
        self.requested = requested
        self.available = available


class StoreError(StorefrontError):
    """The document store failed; the client only sees a generic message."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, detail: Optional[BaseException] = None):
        super().__init__(f"failed to {operation}")
        self.operation = operation
        self.detail = detail
