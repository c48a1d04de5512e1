# common/exceptions.py

"""
DOMAIN ERRORS

Centralized errors raised by services (orders, products, identity).

Each error carries:
- code: stable machine-readable string for API clients
- http_status: status used by common.api when rendering the error envelope
- message: human readable, safe to expose
- details: optional structured payload (field errors, etc.)
"""

from __future__ import annotations

from rest_framework import status


class DomainError(Exception):
    """Base exception for all service-level failures."""

    code = "DOMAIN_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None, *, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class DomainValidationError(DomainError):
    """Raised on malformed or out-of-range input (quantity, index, status, SKU)."""

    code = "VALIDATION_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnauthorizedError(DomainError):
    """Raised when a credential is missing or cannot be verified."""

    code = "UNAUTHORIZED"
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class ForbiddenError(DomainError):
    """Raised when the caller's role is not allowed to perform the operation."""

    code = "FORBIDDEN"
    http_status = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(DomainError):
    """Raised when an order, product, item or code lookup misses."""

    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(DomainError):
    """Raised on duplicate SKUs and on concurrent order modification."""

    code = "CONFLICT"
    http_status = status.HTTP_409_CONFLICT
    default_message = "Conflict"
