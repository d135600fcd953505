"""
Queue-specific exceptions for the waitlist app.

These exceptions are raised by the queue store and should be translated to
appropriate DRF responses in the views.
"""

from __future__ import annotations

from typing import Any


class QueueError(Exception):
    """Base exception for all queue-related errors."""
    pass


class ValidationError(QueueError):
    """
    Raised when a required text field is missing or blank.

    Attributes:
        field: Name of the offending field ('name' or 'examination')
    """
    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = {'detail': str(self)}
        if self.field:
            result['field'] = self.field
        return result


class NotFoundError(QueueError):
    """
    Raised when a patient id does not resolve to a queue entry.

    Only update() raises this; the other mutations treat unknown ids as no-ops.
    """
    def __init__(self, patient_id: int, message: str | None = None):
        self.patient_id = patient_id
        super().__init__(message or f"Patient with ID {patient_id} not found")

    def to_dict(self) -> dict[str, Any]:
        return {
            'detail': str(self),
            'patient_id': self.patient_id,
        }


class StorageError(QueueError):
    """
    Raised when the database transaction behind a queue operation fails.

    The whole operation has been rolled back; callers may retry it.
    """
    def __init__(self, operation: str, message: str = "Queue storage failure"):
        self.operation = operation
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            'detail': str(self),
            'operation': self.operation,
        }
