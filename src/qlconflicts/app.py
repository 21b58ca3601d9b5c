"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from qlconflicts.adapters.spreadsheet import (
    ImportResult,
    default_export_filename,
    import_rows,
    read_rows,
    write_export,
)
from qlconflicts.adapters.sqlalchemy import (
    SqlAlchemyConflictStore,
    SqlAlchemyUnitOfWork,
    is_started,
    startup,
)
from qlconflicts.config import ReconcileConfig, get_reconcile_config, get_storage_config
from qlconflicts.domain.errors import ProductNotFoundError
from qlconflicts.domain.model import ProductScope
from qlconflicts.domain.ports.unit_of_work import ConflictUnitOfWork
from qlconflicts.domain.reconciliation import ConflictReconciler, resolve_conflict
from qlconflicts.domain.review import (
    ConflictStatistics,
    ReviewItem,
    build_review_queue,
    conflict_statistics,
)

if TYPE_CHECKING:
    from pathlib import Path
    from uuid import UUID

    from qlconflicts.domain.model import Conflict, DismissalMode, Product, ResponsiblePerson
    from qlconflicts.domain.ports.store import ConflictStore
    from qlconflicts.domain.reconciliation import ReconciliationReport

UnitOfWorkFactory = Callable[[], ConflictUnitOfWork]

__all__ = [
    "ConflictStatistics",
    "ImportResult",
    "conflict_statistics",
    "delete_conflict",
    "delete_product",
    "export_spreadsheet",
    "import_spreadsheet",
    "list_products",
    "list_responsible_persons",
    "reconcile_conflicts",
    "resolve",
    "update_product_description",
]

log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def _unit_of_work(factory: UnitOfWorkFactory | None) -> ConflictUnitOfWork:
    if factory is None:
        _ensure_started()
        return SqlAlchemyUnitOfWork()
    return factory()


def _store(store: ConflictStore | None) -> ConflictStore:
    if store is None:
        _ensure_started()
        return SqlAlchemyConflictStore()
    return store


def import_spreadsheet(
    path: Path,
    *,
    sheet_name: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ImportResult:
    """Load products and their conflicts from the conflict report workbook."""

    log.info("Importing conflict report from %s", path)
    with _unit_of_work(unit_of_work_factory) as uow:
        result = import_rows(read_rows(path, sheet_name=sheet_name), uow.repositories.products)
        uow.commit()
    return result


def export_spreadsheet(
    path: Path | None = None,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[Path, int]:
    """Write every product and conflict to an export workbook; returns path and row count."""

    target = path or get_storage_config().export_dir() / default_export_filename()
    with _unit_of_work(unit_of_work_factory) as uow:
        products = uow.repositories.products.in_scope(ProductScope.everything())
        rows = write_export(products, target)
    return target, rows


def list_responsible_persons(
    *, unit_of_work_factory: UnitOfWorkFactory | None = None
) -> list[ResponsiblePerson]:
    with _unit_of_work(unit_of_work_factory) as uow:
        return list(uow.repositories.products.responsible_persons())


def list_products(
    email: str,
    *,
    hide_noise: bool = True,
    config: ReconcileConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[ReviewItem]:
    """Products of one responsible person ordered for review."""

    classifier = (config or get_reconcile_config()).classifier
    with _unit_of_work(unit_of_work_factory) as uow:
        products = uow.repositories.products.in_scope(ProductScope.for_person(email))
        return build_review_queue(products, hide_noise=hide_noise, config=classifier)


def resolve(
    conflict_id: UUID,
    selection: str,
    *,
    resolver: str,
    comment: str | None = None,
    store: ConflictStore | None = None,
) -> Conflict:
    return resolve_conflict(
        _store(store), conflict_id, selection, comment=comment, resolver=resolver
    )


def reconcile_conflicts(
    scope: ProductScope | None = None,
    *,
    mode: DismissalMode | None = None,
    include_resolved: bool = False,
    dry_run: bool = False,
    config: ReconcileConfig | None = None,
    store: ConflictStore | None = None,
) -> ReconciliationReport:
    """Re-evaluate conflicts in ``scope`` and dismiss the noise."""

    settings = config or get_reconcile_config()
    reconciler = ConflictReconciler(
        store=_store(store),
        config=settings.classifier,
        mode=mode or settings.dismissal_mode,
        include_resolved=include_resolved,
        dry_run=dry_run,
        resolver=settings.system_resolver,
    )
    effective_scope = scope or ProductScope.everything()
    log.info(
        "Starting reconciliation: scope=%s, mode=%s, include_resolved=%s, dry_run=%s",
        effective_scope,
        reconciler.mode,
        include_resolved,
        dry_run,
    )
    return reconciler.reconcile_scope(effective_scope)


def update_product_description(
    product_id: UUID,
    description: str | None,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Product:
    with _unit_of_work(unit_of_work_factory) as uow:
        product = uow.repositories.products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        product.description = (description.strip() or None) if description else None
        uow.commit()
    log.info("Updated description of product %s", product.item_number)
    return product


def delete_product(
    product_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> None:
    """Delete a product together with its conflicts and their resolution history."""

    with _unit_of_work(unit_of_work_factory) as uow:
        product = uow.repositories.products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        uow.repositories.products.delete(product)
        uow.commit()
    log.info("Deleted product %s", product.item_number)


def delete_conflict(conflict_id: UUID, *, store: ConflictStore | None = None) -> None:
    _store(store).delete_conflict(conflict_id)
    log.info("Deleted conflict %s", conflict_id)
