"""Public interface for the conflicts service adapter."""

from __future__ import annotations

from .client import ConflictsApiClient, ConflictsApiError
from .schema import ConflictPayload, ProductPayload, ResponsiblePersonPayload
from .store import RemoteConflictStore
from .translator import conflict_uuid, parse_conflict, parse_product, product_uuid

__all__ = [
    "ConflictPayload",
    "ConflictsApiClient",
    "ConflictsApiError",
    "ProductPayload",
    "RemoteConflictStore",
    "ResponsiblePersonPayload",
    "conflict_uuid",
    "parse_conflict",
    "parse_product",
    "product_uuid",
]
