"""Exception types raised by the ordering core."""

from __future__ import annotations


class OrderError(Exception):
    """Base class for ordering errors."""


class ValidationError(OrderError):
    """User input cannot be accepted (quantity, preparation, customer details)."""


class LineItemNotFound(OrderError, KeyError):
    """No cart line carries the requested identity."""

    def __init__(self, line_id: str) -> None:
        super().__init__(line_id)
        self.line_id = line_id

    def __str__(self) -> str:
        return f"No cart line with id {self.line_id!r}"


class InvalidTransition(OrderError):
    """A checkout step was requested from a state that does not allow it."""


class AssemblyError(OrderError):
    """An order record cannot be built from the given lines."""
