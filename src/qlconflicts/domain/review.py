"""Review queue: what a human reviewer sees for one responsible person."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from qlconflicts.domain.model import ConflictState
from qlconflicts.domain.reconciliation.classify import (
    DEFAULT_CLASSIFIER_CONFIG,
    ClassifierConfig,
    real_conflicts,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from qlconflicts.domain.model import Conflict, Product


@dataclass(frozen=True, slots=True)
class ReviewItem:
    product: Product
    conflicts: tuple[Conflict, ...]

    @property
    def unresolved(self) -> tuple[Conflict, ...]:
        return tuple(c for c in self.conflicts if c.state is ConflictState.OPEN)

    @property
    def is_fully_resolved(self) -> bool:
        return bool(self.conflicts) and not self.unresolved


@dataclass(frozen=True, slots=True)
class ConflictStatistics:
    total: int
    unresolved: int
    resolved: int
    products_resolved: int
    products_without_conflicts: int


def build_review_queue(
    products: Iterable[Product],
    *,
    hide_noise: bool = True,
    config: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG,
) -> list[ReviewItem]:
    """Order products for review.

    Products with visible conflicts come first, most unresolved conflicts
    first; products without any follow in item-number order. Dismissed
    conflicts are never shown.
    """

    items: list[ReviewItem] = []
    for product in products:
        visible = [c for c in product.conflicts if not c.is_dismissed]
        if hide_noise:
            visible = real_conflicts(visible, config)
        items.append(ReviewItem(product=product, conflicts=tuple(visible)))

    with_conflicts = sorted(
        (item for item in items if item.conflicts),
        key=lambda item: (-len(item.unresolved), item.product.item_number),
    )
    without_conflicts = sorted(
        (item for item in items if not item.conflicts),
        key=lambda item: item.product.item_number,
    )
    return with_conflicts + without_conflicts


def conflict_statistics(items: Iterable[ReviewItem]) -> ConflictStatistics:
    total = unresolved = products_resolved = products_without_conflicts = 0
    for item in items:
        if not item.conflicts:
            products_without_conflicts += 1
            continue
        total += len(item.conflicts)
        unresolved += len(item.unresolved)
        if item.is_fully_resolved:
            products_resolved += 1
    return ConflictStatistics(
        total=total,
        unresolved=unresolved,
        resolved=total - unresolved,
        products_resolved=products_resolved,
        products_without_conflicts=products_without_conflicts,
    )
