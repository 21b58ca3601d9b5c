"""Errors raised by the conflict engine and its storage collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class ConflictEngineError(Exception):
    """Base class for conflict engine errors."""


class InvalidSelectionError(ConflictEngineError, ValueError):
    """Raised when a resolution selects neither the quality-line nor the attribute value."""

    def __init__(self, selection: object) -> None:
        super().__init__(
            f"Invalid selection {selection!r}: expected 'quality_line' or 'attribute'"
        )
        self.selection = selection


class ConflictNotFoundError(ConflictEngineError, LookupError):
    def __init__(self, conflict_id: UUID) -> None:
        super().__init__(f"Conflict {conflict_id} not found")
        self.conflict_id = conflict_id


class ProductNotFoundError(ConflictEngineError, LookupError):
    def __init__(self, product_id: UUID) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class StorageError(ConflictEngineError):
    """Transient failure of the storage collaborator; safe to retry."""
