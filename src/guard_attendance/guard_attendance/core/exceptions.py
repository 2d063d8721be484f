from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a slot does not exist (or is out of scope for the caller)."""


class InvalidStateError(DomainError):
    """Raised when an operation is not valid for the slot's current state."""


class ConflictError(DomainError):
    """Raised when a guard is already booked on another slot for the same date/shift."""

    def __init__(self, message: str, *, conflicting_slot_id: Optional[int] = None):
        super().__init__(message)
        self.conflicting_slot_id = conflicting_slot_id


class DuplicateSlotError(DomainError):
    """Raised by a store when a slot position (site, date, shift, role, number) is taken."""
