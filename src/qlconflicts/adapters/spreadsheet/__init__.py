"""Spreadsheet import and export of product conflicts."""

from __future__ import annotations

from .importer import ImportResult, import_rows, product_from_row
from .reader import SpreadsheetError, format_cell_value, read_rows
from .schema import (
    ConflictCells,
    ProductRow,
    attribute_column,
    equal_column,
    quality_line_column,
    reason_column,
)
from .writer import EXPORT_HEADERS, default_export_filename, export_rows, write_export

__all__ = [
    "EXPORT_HEADERS",
    "ConflictCells",
    "ImportResult",
    "ProductRow",
    "SpreadsheetError",
    "attribute_column",
    "default_export_filename",
    "equal_column",
    "export_rows",
    "format_cell_value",
    "import_rows",
    "product_from_row",
    "quality_line_column",
    "reason_column",
    "read_rows",
    "write_export",
]
