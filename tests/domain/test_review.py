from __future__ import annotations

from qlconflicts.domain.model import ConflictType
from qlconflicts.domain.review import build_review_queue, conflict_statistics
from tests.helpers.conflicts import make_conflict, make_product


def test_review_queue_orders_by_unresolved_count_then_item_number() -> None:
    quiet = make_product("300")
    busy = make_product("200")
    make_conflict("Red", "Blue", product=busy)
    make_conflict("Cotton", "Wool", conflict_type=ConflictType.MATERIAL, product=busy)
    single = make_product("100")
    make_conflict("Red", "Green", product=single)
    empty_low = make_product("050")

    queue = build_review_queue([quiet, single, empty_low, busy])

    assert [item.product.item_number for item in queue] == ["200", "100", "050", "300"]
    assert [len(item.unresolved) for item in queue] == [2, 1, 0, 0]


def test_review_queue_hides_noise_and_dismissed_conflicts() -> None:
    product = make_product()
    real = make_conflict("Red", "Blue", product=product)
    make_conflict("1 kg", "1000 g", conflict_type=ConflictType.WEIGHT, product=product)
    dismissed = make_conflict(
        "Cotton", "Wool", conflict_type=ConflictType.MATERIAL, product=product
    )
    dismissed.record_resolution("deleted", comment="", resolver="System Cleanup")

    (item,) = build_review_queue([product])
    (unfiltered,) = build_review_queue([product], hide_noise=False)

    assert item.conflicts == (real,)
    assert len(unfiltered.conflicts) == 2
    assert dismissed not in unfiltered.conflicts


def test_conflict_statistics_counts_products_and_conflicts() -> None:
    done = make_product("1")
    make_conflict(product=done).record_resolution("attribute", comment="", resolver="Jane")
    pending = make_product("2")
    make_conflict(product=pending)
    make_conflict("Cotton", "Wool", conflict_type=ConflictType.MATERIAL, product=pending)
    empty = make_product("3")

    stats = conflict_statistics(build_review_queue([done, pending, empty]))

    assert stats.total == 3
    assert stats.unresolved == 2
    assert stats.resolved == 1
    assert stats.products_resolved == 1
    assert stats.products_without_conflicts == 1
