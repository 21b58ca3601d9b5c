"""Selection of the products a reconciliation run looks at."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from qlconflicts.domain.model.product import Product


@dataclass(frozen=True, slots=True, kw_only=True)
class ProductScope:
    """Filter on products; an empty scope covers every product."""

    responsible_email: str | None = None
    item_numbers: frozenset[str] = frozenset()

    @classmethod
    def everything(cls) -> ProductScope:
        return cls()

    @classmethod
    def for_person(cls, email: str) -> ProductScope:
        return cls(responsible_email=email)

    def includes(self, product: Product) -> bool:
        if (
            self.responsible_email is not None
            and product.responsible_person_email != self.responsible_email
        ):
            return False
        return not self.item_numbers or product.item_number in self.item_numbers
