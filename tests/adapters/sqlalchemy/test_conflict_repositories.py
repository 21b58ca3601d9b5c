"""Tests for SQLAlchemy product and conflict repositories."""

from __future__ import annotations

from sqlalchemy.orm import Session  # noqa: TC002

from qlconflicts.adapters.sqlalchemy.repositories import (
    SqlAlchemyConflictRepository,
    SqlAlchemyProductRepository,
)
from qlconflicts.domain.model import ProductScope, ResponsiblePerson
from tests.helpers.conflicts import make_conflict, make_product


def _seed(session: Session) -> None:
    first = make_product("200", name="Ann", email="ann@example.com")
    make_conflict("Red", "Blue", product=first)
    second = make_product("100", name="Bob", email="bob@example.com")
    make_conflict("L", "XL", product=second)
    third = make_product("300", name="Ann", email="ann@example.com")
    session.add_all([first, second, third])
    session.commit()


def test_product_repository_finds_by_item_number(sqlite_session: Session) -> None:
    _seed(sqlite_session)
    repository = SqlAlchemyProductRepository(sqlite_session)

    product = repository.get_by_item_number("100")

    assert product is not None
    assert product.responsible_person_email == "bob@example.com"
    assert repository.get_by_item_number("999") is None
    assert repository.get(product.id) is product


def test_product_repository_lists_existing_item_numbers(sqlite_session: Session) -> None:
    _seed(sqlite_session)

    numbers = SqlAlchemyProductRepository(sqlite_session).existing_item_numbers()

    assert numbers == frozenset({"100", "200", "300"})


def test_product_repository_scopes_by_responsible_person(sqlite_session: Session) -> None:
    _seed(sqlite_session)
    repository = SqlAlchemyProductRepository(sqlite_session)

    products = repository.in_scope(ProductScope.for_person("ann@example.com"))

    assert [p.item_number for p in products] == ["200", "300"]
    assert [len(p.conflicts) for p in products] == [1, 0]


def test_product_repository_lists_distinct_responsible_persons(sqlite_session: Session) -> None:
    _seed(sqlite_session)

    persons = SqlAlchemyProductRepository(sqlite_session).responsible_persons()

    assert persons == [
        ResponsiblePerson("Ann", "ann@example.com"),
        ResponsiblePerson("Bob", "bob@example.com"),
    ]


def test_conflict_repository_scopes_by_item_number(sqlite_session: Session) -> None:
    _seed(sqlite_session)
    repository = SqlAlchemyConflictRepository(sqlite_session)

    everything = repository.in_scope(ProductScope.everything())
    scoped = repository.in_scope(ProductScope(item_numbers=frozenset({"200"})))

    assert [c.product.item_number for c in everything] == ["100", "200"]
    assert [c.quality_line_value for c in scoped] == ["Red"]


def test_conflict_repository_delete_detaches_from_product(sqlite_session: Session) -> None:
    _seed(sqlite_session)
    repository = SqlAlchemyConflictRepository(sqlite_session)
    (conflict,) = repository.in_scope(ProductScope(item_numbers=frozenset({"100"})))
    product = conflict.product

    repository.delete(conflict)
    sqlite_session.commit()

    assert product.conflicts == ()
    assert repository.get_for_update(conflict.id) is None
