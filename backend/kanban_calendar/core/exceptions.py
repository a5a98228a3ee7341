"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class KanbanCalendarError(Exception):
    """Base exception for kanban_calendar."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(KanbanCalendarError):
    """Resource not found."""

    pass


class ValidationError(KanbanCalendarError):
    """Validation error."""

    pass


class InfrastructureError(KanbanCalendarError):
    """Infrastructure-related error (DB, external services, etc.)."""

    pass

