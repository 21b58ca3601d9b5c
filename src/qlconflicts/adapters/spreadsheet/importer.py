"""Turn validated spreadsheet rows into products and their conflicts."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from qlconflicts.domain.model import Product

from .schema import ProductRow

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from qlconflicts.domain.ports.persistence import ProductRepository

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class ImportResult:
    products_created: int = 0
    conflicts_created: int = 0
    rows_skipped: int = 0


def product_from_row(row: ProductRow) -> Product:
    """Build a product with one conflict per dimension whose two values differ."""

    product = Product(
        item_number=row.item_number,
        category=row.category,
        overall_reason=row.overall_reason,
        overall_equal=row.overall_equal,
        responsible_person_name=row.name,
        responsible_person_email=row.email,
    )
    for conflict_type, cells in row.cells.items():
        if not cells.differs:
            continue
        product.add_conflict(
            conflict_type,
            quality_line_value=cells.quality_line,
            attribute_value=cells.attribute,
            reason=cells.reason,
            is_equal=cells.equal,
        )
    return product


def import_rows(
    rows: Iterable[Mapping[str, str | None]],
    products: ProductRepository,
) -> ImportResult:
    """Add a product per new row; existing and repeated item numbers are skipped."""

    result = ImportResult()
    seen = set(products.existing_item_numbers())
    for index, raw in enumerate(rows, start=2):
        try:
            row = ProductRow.model_validate(raw)
        except ValidationError as exc:
            log.warning("Skipping spreadsheet row %d: %s", index, exc.errors()[0]["msg"])
            result.rows_skipped += 1
            continue
        if row.item_number in seen:
            log.debug("Skipping row %d: item %s already imported", index, row.item_number)
            result.rows_skipped += 1
            continue
        seen.add(row.item_number)

        product = product_from_row(row)
        products.add(product)
        result.products_created += 1
        result.conflicts_created += len(product.conflicts)
    log.info(
        "Imported %d products with %d conflicts (%d rows skipped)",
        result.products_created,
        result.conflicts_created,
        result.rows_skipped,
    )
    return result
