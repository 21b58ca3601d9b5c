from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest
from openpyxl import Workbook, load_workbook

from qlconflicts import app
from qlconflicts.adapters.sqlalchemy import SqlAlchemyConflictStore
from qlconflicts.config import ReconcileConfig
from qlconflicts.domain.errors import InvalidSelectionError, ProductNotFoundError
from qlconflicts.domain.model import ConflictType, DismissalMode, ProductScope, Selection
from tests.helpers.conflicts import InMemoryConflictStore, make_conflict, make_product

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from qlconflicts.adapters.sqlalchemy import SqlAlchemyUnitOfWork

    UnitOfWorkFactory = Callable[[], SqlAlchemyUnitOfWork]


def _workbook(path: Path) -> Path:
    workbook = Workbook()
    sheet = workbook.active
    assert sheet is not None
    sheet.append(
        (
            "item_number",
            "category",
            "Name",
            "Email",
            "Size (quality_lines)",
            "Size (attributes)",
            "Specifications (quality_lines)",
            "Specifications (attributes)",
        )
    )
    sheet.append((100001, "KITCHEN", "Jane Doe", "jane@example.com", "L", "XL", "a", "b"))
    sheet.append((100002, "KITCHEN", "Jane Doe", "jane@example.com", "M", "M", None, None))
    sheet.append((100003, "GARDEN", "Bob Roe", "bob@example.com", "S", "Missing", None, None))
    workbook.save(path)
    return path


def _seed(factory: UnitOfWorkFactory) -> None:
    with factory() as uow:
        product = make_product("100001", name="Jane Doe", email="jane@example.com")
        make_conflict("Small", "Large", conflict_type=ConflictType.SIZE, product=product)
        make_conflict("a", "b", conflict_type=ConflictType.SPECIFICATIONS, product=product)
        uow.repositories.products.add(product)
        uow.repositories.products.add(make_product("100002", name="Jane Doe"))
        uow.commit()


def test_import_spreadsheet_is_rerunnable(
    sqlite_unit_of_work: UnitOfWorkFactory, tmp_path: Path
) -> None:
    path = _workbook(tmp_path / "report.xlsx")

    first = app.import_spreadsheet(path, unit_of_work_factory=sqlite_unit_of_work)
    second = app.import_spreadsheet(path, unit_of_work_factory=sqlite_unit_of_work)

    assert (first.products_created, first.conflicts_created) == (3, 3)
    assert second.products_created == 0
    assert second.rows_skipped == 3
    persons = app.list_responsible_persons(unit_of_work_factory=sqlite_unit_of_work)
    assert [p.email for p in persons] == ["bob@example.com", "jane@example.com"]


def test_list_products_hides_noise_by_default(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    _seed(sqlite_unit_of_work)
    config = ReconcileConfig()

    queue = app.list_products(
        "jane@example.com", config=config, unit_of_work_factory=sqlite_unit_of_work
    )
    everything = app.list_products(
        "jane@example.com",
        hide_noise=False,
        config=config,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert [item.product.item_number for item in queue] == ["100001", "100002"]
    assert [c.conflict_type for c in queue[0].conflicts] == [ConflictType.SIZE]
    assert len(everything[0].conflicts) == 2
    assert app.conflict_statistics(queue).products_without_conflicts == 1


def test_resolve_through_the_database_store(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    _seed(sqlite_unit_of_work)
    store = SqlAlchemyConflictStore(sqlite_unit_of_work)
    (conflict, _) = store.fetch_conflicts(ProductScope(item_numbers=frozenset({"100001"})))

    resolved = app.resolve(
        conflict.id, "attribute", resolver="Jane", comment="photo", store=store
    )

    assert resolved.resolved_value == Selection.ATTRIBUTE
    with pytest.raises(InvalidSelectionError):
        app.resolve(conflict.id, "both", resolver="Jane", store=store)


def test_reconcile_conflicts_uses_config_defaults(memory_store: InMemoryConflictStore) -> None:
    noise = make_conflict("Red", "Red")
    memory_store.add(noise)
    config = ReconcileConfig(dismissal_mode=DismissalMode.MARK, system_resolver="Sweeper")

    report = app.reconcile_conflicts(config=config, store=memory_store)

    assert report.dismissed == 1
    assert noise.resolved_by == "Sweeper"
    assert noise.is_dismissed


def test_reconcile_conflicts_mode_argument_wins(memory_store: InMemoryConflictStore) -> None:
    noise = make_conflict("Red", "Red")
    memory_store.add(noise)
    config = ReconcileConfig(dismissal_mode=DismissalMode.MARK)

    app.reconcile_conflicts(mode=DismissalMode.DELETE, config=config, store=memory_store)

    assert memory_store.conflicts == {}


def test_update_and_delete_product(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    _seed(sqlite_unit_of_work)
    with sqlite_unit_of_work() as uow:
        product = uow.repositories.products.get_by_item_number("100001")
        assert product is not None
        product_id = product.id

    updated = app.update_product_description(
        product_id, "  Kettle  ", unit_of_work_factory=sqlite_unit_of_work
    )
    assert updated.description == "Kettle"

    app.delete_product(product_id, unit_of_work_factory=sqlite_unit_of_work)

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.products.get(product_id) is None
        assert uow.repositories.conflicts.in_scope(ProductScope.everything()) == []
    with pytest.raises(ProductNotFoundError):
        app.delete_product(product_id, unit_of_work_factory=sqlite_unit_of_work)
    with pytest.raises(ProductNotFoundError):
        app.update_product_description(uuid4(), None, unit_of_work_factory=sqlite_unit_of_work)


def test_export_spreadsheet_writes_every_product(
    sqlite_unit_of_work: UnitOfWorkFactory, tmp_path: Path
) -> None:
    _seed(sqlite_unit_of_work)
    target = tmp_path / "export.xlsx"

    path, rows = app.export_spreadsheet(target, unit_of_work_factory=sqlite_unit_of_work)

    assert path == target
    assert rows == 3
    sheet = load_workbook(path).active
    assert sheet is not None
    assert [row[0] for row in sheet.iter_rows(min_row=2, values_only=True)] == [
        "100001",
        "100001",
        "100002",
    ]


def test_delete_conflict_through_store(memory_store: InMemoryConflictStore) -> None:
    conflict = make_conflict()
    memory_store.add(conflict)

    app.delete_conflict(conflict.id, store=memory_store)

    assert memory_store.conflicts == {}
