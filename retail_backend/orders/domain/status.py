"""
ORDER STATUS RULES

This module defines the ONLY place where order status transitions are decided.

DESIGN PRINCIPLES:
- No database writes
- No side effects
- Single source of truth: swap can_transition() for a stricter machine
  without touching call sites

Current policy is permissive: cashiers may set any workflow status at any time
(self-loops included). "closed" is reached only through the close operation.
"""

from __future__ import annotations

from common.exceptions import DomainValidationError

# ============================================================
# STATE DEFINITIONS
# ============================================================

STATUS_PENDING = "pending"
STATUS_CONFIRMED = "confirmed"
STATUS_PROCESSING = "processing"
STATUS_READY = "ready"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
STATUS_CLOSED = "closed"

WORKFLOW_STATUSES = (
    STATUS_PENDING,
    STATUS_CONFIRMED,
    STATUS_PROCESSING,
    STATUS_READY,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
)

ALL_STATUSES = WORKFLOW_STATUSES + (STATUS_CLOSED,)

STATUS_CHOICES = [
    (STATUS_PENDING, "Pending"),
    (STATUS_CONFIRMED, "Confirmed"),
    (STATUS_PROCESSING, "Processing"),
    (STATUS_READY, "Ready"),
    (STATUS_COMPLETED, "Completed"),
    (STATUS_CANCELLED, "Cancelled"),
    (STATUS_CLOSED, "Closed"),
]


# ============================================================
# DOMAIN ERRORS
# ============================================================


class InvalidStatusTransitionError(DomainValidationError):
    pass


# ============================================================
# DOMAIN RULES
# ============================================================


def is_workflow_status(value) -> bool:
    return isinstance(value, str) and value in WORKFLOW_STATUSES


def can_transition(*, from_status: str, to_status: str) -> bool:
    return is_workflow_status(to_status)


def validate_transition(*, order, target_status: str) -> None:
    if not is_workflow_status(target_status):
        raise DomainValidationError(
            "Invalid status",
            details={"allowed": list(WORKFLOW_STATUSES)},
        )

    if not can_transition(from_status=order.status, to_status=target_status):
        raise InvalidStatusTransitionError(
            f"Order {order.id} cannot transition from "
            f"'{order.status}' to '{target_status}'"
        )
