"""Public domain model surface."""

from __future__ import annotations

from qlconflicts.domain.model.entity import Entity, new_id
from qlconflicts.domain.model.enums import (
    ConflictState,
    ConflictType,
    DismissalMode,
    NoiseCause,
    Selection,
)
from qlconflicts.domain.model.product import (
    DISMISSED_SENTINEL,
    Conflict,
    Product,
    Resolution,
    ResponsiblePerson,
    utcnow,
)
from qlconflicts.domain.model.scope import ProductScope

__all__ = [
    "DISMISSED_SENTINEL",
    "Conflict",
    "ConflictState",
    "ConflictType",
    "DismissalMode",
    "Entity",
    "NoiseCause",
    "Product",
    "ProductScope",
    "Resolution",
    "ResponsiblePerson",
    "Selection",
    "new_id",
    "utcnow",
]
