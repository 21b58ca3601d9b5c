from __future__ import annotations

from datetime import UTC, datetime

import pytest

from qlconflicts.domain.model import (
    Conflict,
    ConflictState,
    ConflictType,
    ProductScope,
    ResponsiblePerson,
)
from tests.helpers.conflicts import make_conflict, make_product


def test_conflict_attaches_itself_to_its_product() -> None:
    product = make_product()

    conflict = product.add_conflict(
        ConflictType.SIZE, quality_line_value="L", attribute_value="XL", reason="size differs"
    )

    assert product.conflicts == (conflict,)
    assert conflict.product is product
    assert conflict.state is ConflictState.OPEN
    assert product.open_conflicts == (conflict,)


def test_partial_resolution_fields_are_rejected() -> None:
    product = make_product()

    with pytest.raises(ValueError, match="resolution fields"):
        Conflict(
            product=product,
            conflict_type=ConflictType.SIZE,
            resolved_value="attribute",
        )

    assert product.conflicts == ()


def test_record_resolution_sets_all_fields_together() -> None:
    conflict = make_conflict()
    at = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    resolution = conflict.record_resolution("quality_line", comment=None, resolver="Jane", at=at)

    assert conflict.resolved_value == "quality_line"
    assert conflict.resolution_comment == ""
    assert conflict.resolved_by == "Jane"
    assert conflict.resolved_at == at
    assert resolution.created_at == at
    assert conflict.resolutions == (resolution,)
    assert conflict.is_resolved
    assert conflict.product.open_conflicts == ()


def test_record_resolution_requires_a_resolver() -> None:
    conflict = make_conflict()

    with pytest.raises(ValueError, match="resolver"):
        conflict.record_resolution("attribute", comment="", resolver="")

    assert conflict.state is ConflictState.OPEN
    assert conflict.resolutions == ()


def test_selected_text_is_none_for_dismissed_conflicts() -> None:
    conflict = make_conflict("Red", "Blue")
    conflict.record_resolution("deleted", comment="noise", resolver="System Cleanup")

    assert conflict.is_dismissed
    assert conflict.selected_text is None


def test_remove_conflict_detaches_it() -> None:
    product = make_product()
    conflict = make_conflict(product=product)

    product.remove_conflict(conflict)
    product.remove_conflict(conflict)

    assert product.conflicts == ()


def test_responsible_person_pairs_name_and_email() -> None:
    product = make_product(name="Ann", email="ann@example.com")

    assert product.responsible_person == ResponsiblePerson("Ann", "ann@example.com")


def test_product_scope_filters_by_person_and_item_number() -> None:
    first = make_product("1", email="a@example.com")
    second = make_product("2", email="b@example.com")

    assert ProductScope.everything().includes(first)
    assert ProductScope.for_person("a@example.com").includes(first)
    assert not ProductScope.for_person("a@example.com").includes(second)

    by_item = ProductScope(item_numbers=frozenset({"2"}))
    assert by_item.includes(second)
    assert not by_item.includes(first)

    combined = ProductScope(responsible_email="a@example.com", item_numbers=frozenset({"2"}))
    assert not combined.includes(second)
