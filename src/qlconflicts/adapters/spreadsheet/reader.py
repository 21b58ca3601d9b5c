"""Read the conflict report workbook into plain row mappings."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from logging import getLogger
from typing import TYPE_CHECKING, Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

log = getLogger(__name__)


class SpreadsheetError(RuntimeError):
    """Raised when a workbook cannot be opened or has no header row."""


def format_cell_value(value: Any) -> str | None:
    """Render a cell as text; empty cells and blank strings become ``None``.

    Floats go through ``Decimal`` so ``1.0`` reads as ``1`` and ``0.1`` stays ``0.1``.
    """

    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        normalized = Decimal(str(value)).normalize()
        if normalized == normalized.to_integral_value():
            return str(int(normalized))
        return str(normalized)
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    return str(value)


def read_rows(path: Path, *, sheet_name: str | None = None) -> Iterator[dict[str, str | None]]:
    """Yield each data row of the first (or named) sheet keyed by its header."""

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, OSError) as exc:
        raise SpreadsheetError(f"Cannot open workbook {path}: {exc}") from exc

    try:
        if sheet_name and sheet_name not in workbook.sheetnames:
            raise SpreadsheetError(f"Workbook {path} has no sheet {sheet_name!r}")
        sheet = workbook[sheet_name] if sheet_name else workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header_row = next(rows, None)
        if header_row is None:
            raise SpreadsheetError(f"Workbook {path} has no header row")
        headers = [format_cell_value(cell) for cell in header_row]
        log.debug("Read %d header columns from %s", len(headers), path)

        for values in rows:
            record = {
                header: format_cell_value(value)
                for header, value in zip(headers, values, strict=False)
                if header is not None
            }
            if any(v is not None for v in record.values()):
                yield record
    finally:
        workbook.close()
