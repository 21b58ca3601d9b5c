# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from qlconflicts.app import (
    conflict_statistics,
    delete_conflict,
    delete_product,
    export_spreadsheet,
    import_spreadsheet,
    list_products,
    list_responsible_persons,
    reconcile_conflicts,
    resolve,
)
from qlconflicts.config import configure_logging
from qlconflicts.domain.model import DismissalMode, ProductScope, Selection

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from qlconflicts.domain.ports.store import ConflictStore
    from qlconflicts.domain.review import ReviewItem

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Review and reconcile quality-line / attribute product conflicts"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_cmd = subparsers.add_parser("import", help="Import a conflict report workbook")
    import_cmd.add_argument("path", type=Path, help="Path to the .xlsx conflict report")
    import_cmd.add_argument("--sheet", type=str, help="Sheet name (defaults to the first sheet)")

    export = subparsers.add_parser("export", help="Export conflicts and resolutions to .xlsx")
    export.add_argument(
        "path",
        type=Path,
        nargs="?",
        help="Target file (defaults to the export directory with a dated name)",
    )

    subparsers.add_parser("persons", help="List responsible persons")

    show = subparsers.add_parser("show", help="Show the review queue of a responsible person")
    show.add_argument("email", type=str, help="Responsible person email")
    show.add_argument(
        "--all",
        action="store_true",
        help="Also show conflicts classified as noise",
    )

    resolve_cmd = subparsers.add_parser("resolve", help="Resolve a conflict")
    resolve_cmd.add_argument("conflict_id", type=str, help="Conflict id")
    resolve_cmd.add_argument(
        "selection",
        type=str,
        choices=[s.value for s in Selection],
        help="Which value wins",
    )
    resolve_cmd.add_argument("--resolver", type=str, required=True, help="Name of the resolver")
    resolve_cmd.add_argument("--comment", type=str, default="", help="Optional comment")

    reconcile = subparsers.add_parser("reconcile", help="Dismiss conflicts classified as noise")
    reconcile.add_argument("--email", type=str, help="Only products of this responsible person")
    reconcile.add_argument(
        "--item",
        action="append",
        default=[],
        dest="items",
        help="Only this item number (repeatable)",
    )
    reconcile.add_argument(
        "--mode",
        type=str,
        choices=[m.value for m in DismissalMode],
        help="Delete noise conflicts or mark them resolved as 'deleted' (defaults to config)",
    )
    reconcile.add_argument(
        "--include-resolved",
        action="store_true",
        help="Also re-evaluate conflicts a human already resolved",
    )
    reconcile.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be dismissed without writing",
    )
    reconcile.add_argument(
        "--remote",
        action="store_true",
        help="Work against the conflicts service instead of the local database",
    )

    delete_product_cmd = subparsers.add_parser(
        "delete-product", help="Delete a product with its conflicts"
    )
    delete_product_cmd.add_argument("product_id", type=str, help="Product id")

    delete_conflict_cmd = subparsers.add_parser("delete-conflict", help="Delete a conflict")
    delete_conflict_cmd.add_argument("conflict_id", type=str, help="Conflict id")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _print_review_queue(items: Sequence[ReviewItem]) -> None:
    for item in items:
        product = item.product
        print(
            f"{product.item_number}  {product.category}  "
            f"({len(item.unresolved)} unresolved / {len(item.conflicts)})  [{product.id}]"
        )
        for conflict in item.conflicts:
            status = conflict.resolved_value or "open"
            print(f"    [{status}] {conflict.conflict_type}  ({conflict.id})")
            print(f"        quality line: {conflict.quality_line_value or ''}")
            print(f"        attribute:    {conflict.attribute_value or ''}")
            if conflict.reason:
                print(f"        reason:       {conflict.reason}")
    stats = conflict_statistics(items)
    print(
        f"{stats.total} conflicts, {stats.unresolved} unresolved, {stats.resolved} resolved; "
        f"{stats.products_resolved} products fully resolved, "
        f"{stats.products_without_conflicts} without conflicts"
    )


def _reconcile(args: argparse.Namespace, store: ConflictStore | None = None) -> None:
    scope = ProductScope(responsible_email=args.email, item_numbers=frozenset(args.items))
    report = reconcile_conflicts(
        scope,
        mode=DismissalMode(args.mode) if args.mode else None,
        include_resolved=args.include_resolved,
        dry_run=args.dry_run,
        store=store,
    )
    log.info(
        "Reconciliation finished: scanned=%s, dismissed=%s, kept=%s, errors=%s",
        report.total_scanned,
        report.dismissed,
        report.kept,
        len(report.errors),
    )
    for cause, count in sorted(report.dismissed_by_cause.items()):
        log.info("  %s: %s", cause, count)
    if report.has_errors:
        raise RuntimeError(f"{len(report.errors)} conflicts could not be dismissed")


def _run(args: argparse.Namespace) -> None:  # noqa: C901
    if args.command == "import":
        result = import_spreadsheet(args.path, sheet_name=args.sheet)
        log.info(
            "Import finished: products=%s, conflicts=%s, skipped=%s",
            result.products_created,
            result.conflicts_created,
            result.rows_skipped,
        )
    elif args.command == "export":
        path, rows = export_spreadsheet(args.path)
        log.info("Export finished: %s rows written to %s", rows, path)
    elif args.command == "persons":
        for person in list_responsible_persons():
            print(f"{person.name} <{person.email}>")
    elif args.command == "show":
        _print_review_queue(list_products(args.email, hide_noise=not args.all))
    elif args.command == "resolve":
        conflict = resolve(
            _parse_uuid(args.conflict_id),
            args.selection,
            resolver=args.resolver,
            comment=args.comment,
        )
        log.info("Conflict %s resolved: %s", conflict.id, conflict.resolved_value)
    elif args.command == "reconcile":
        if not args.remote:
            _reconcile(args)
            return
        from qlconflicts.adapters.conflicts_api import RemoteConflictStore  # noqa: PLC0415

        remote = RemoteConflictStore()
        try:
            _reconcile(args, remote)
        finally:
            remote.close()
    elif args.command == "delete-product":
        delete_product(_parse_uuid(args.product_id))
    elif args.command == "delete-conflict":
        delete_conflict(_parse_uuid(args.conflict_id))
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        for attr in ("conflict_id", "product_id"):
            if hasattr(parsed_args, attr):
                _parse_uuid(getattr(parsed_args, attr))
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load .env, handle Ctrl+C, run the CLI."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
