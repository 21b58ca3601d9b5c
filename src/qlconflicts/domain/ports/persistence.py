"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from qlconflicts.domain.model import Conflict, Product

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from qlconflicts.domain.model import ProductScope, ResponsiblePerson


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: UUID) -> TEntity | None: ...

    def delete(self, entity: TEntity) -> None: ...


@runtime_checkable
class ProductRepository(Repository[Product], Protocol):
    """Persistence contract for products (aggregate root of conflicts)."""

    def get_by_item_number(self, item_number: str) -> Product | None: ...

    def existing_item_numbers(self) -> frozenset[str]: ...

    def in_scope(self, scope: ProductScope) -> Sequence[Product]: ...

    def responsible_persons(self) -> Sequence[ResponsiblePerson]: ...


@runtime_checkable
class ConflictRepository(Repository[Conflict], Protocol):
    """Persistence contract for conflicts."""

    def get_for_update(self, conflict_id: UUID) -> Conflict | None: ...

    def in_scope(self, scope: ProductScope) -> Sequence[Conflict]: ...
