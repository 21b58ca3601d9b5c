"""Write the resolved-conflicts export workbook."""

from __future__ import annotations

from datetime import UTC, date, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from qlconflicts.domain.model import Conflict, Product

log = getLogger(__name__)

SHEET_TITLE: Final = "Resolved Conflicts"
UNRESOLVED: Final = "Unresolved"
NO_CONFLICTS: Final = "No Conflicts"
EXPORT_HEADERS: Final[tuple[str, ...]] = (
    "Item Number",
    "Product Description",
    "Category",
    "Conflict Type",
    "Reason",
    "Quality Line Value",
    "Attribute Value",
    "Resolved Value",
    "Comment",
    "Resolved By",
    "Resolved At",
)
_COLUMN_WIDTHS: Final[tuple[int, ...]] = (15, 30, 20, 25, 40, 30, 30, 20, 40, 20, 20)

type ExportCell = str | datetime | None
type ExportRow = tuple[ExportCell, ...]


def default_export_filename(today: date | None = None) -> str:
    day = today or datetime.now(UTC).date()
    return f"product-conflicts-export-{day.isoformat()}.xlsx"


def _naive_utc(value: datetime | None) -> datetime | None:
    # openpyxl rejects timezone-aware datetimes
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value


def _conflict_row(product: Product, conflict: Conflict) -> ExportRow:
    return (
        product.item_number,
        product.description or "",
        product.category,
        str(conflict.conflict_type),
        conflict.reason or "",
        conflict.quality_line_value or "",
        conflict.attribute_value or "",
        conflict.resolved_value or UNRESOLVED,
        conflict.resolution_comment or "",
        conflict.resolved_by or "",
        _naive_utc(conflict.resolved_at),
    )


def export_rows(products: Iterable[Product]) -> list[ExportRow]:
    """One row per conflict, or a single ``No Conflicts`` row, ordered by item number."""

    rows: list[ExportRow] = []
    for product in sorted(products, key=lambda p: p.item_number):
        if not product.conflicts:
            rows.append(
                (
                    product.item_number,
                    product.description or "",
                    product.category,
                    NO_CONFLICTS,
                    "",
                    "",
                    "",
                    "",
                    "",
                    "",
                    None,
                )
            )
            continue
        rows.extend(_conflict_row(product, conflict) for conflict in product.conflicts)
    return rows


def write_export(products: Iterable[Product], path: Path) -> int:
    """Write the export workbook to ``path`` and return the number of data rows."""

    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        sheet = workbook.create_sheet()
    sheet.title = SHEET_TITLE
    sheet.append(EXPORT_HEADERS)
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    for index, width in enumerate(_COLUMN_WIDTHS, start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width

    rows = export_rows(products)
    for row in rows:
        sheet.append(row)

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    log.info("Exported %d rows to %s", len(rows), path)
    return len(rows)
