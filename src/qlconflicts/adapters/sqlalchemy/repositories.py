"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from qlconflicts.adapters.sqlalchemy.mappings import conflict_table, product_table
from qlconflicts.domain.model import Conflict, Product, ResponsiblePerson

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy import Select
    from sqlalchemy.orm import Session

    from qlconflicts.domain.model import ProductScope

def _conflict_loaders() -> tuple[Any, ...]:
    # relationship attributes only exist on the classes once mappers are started
    resolutions: Any = Conflict._resolutions  # noqa: SLF001  # pyright: ignore[reportPrivateUsage]
    product: Any = Conflict.product
    conflicts: Any = Product._conflicts  # noqa: SLF001  # pyright: ignore[reportPrivateUsage]
    return selectinload(product).selectinload(conflicts), selectinload(resolutions)


def _product_loader() -> Any:
    conflicts: Any = Product._conflicts  # noqa: SLF001  # pyright: ignore[reportPrivateUsage]
    resolutions: Any = Conflict._resolutions  # noqa: SLF001  # pyright: ignore[reportPrivateUsage]
    return selectinload(conflicts).selectinload(resolutions)


def _scoped[TSelect: Select[Any]](stmt: TSelect, scope: ProductScope) -> TSelect:
    if scope.responsible_email is not None:
        stmt = stmt.where(product_table.c.responsible_person_email == scope.responsible_email)
    if scope.item_numbers:
        stmt = stmt.where(product_table.c.item_number.in_(sorted(scope.item_numbers)))
    return stmt


class SqlAlchemyProductRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Product) -> None:
        self.session.add(entity)

    def get(self, entity_id: UUID) -> Product | None:
        return self.session.get(Product, entity_id)

    def delete(self, entity: Product) -> None:
        self.session.delete(entity)

    def get_by_item_number(self, item_number: str) -> Product | None:
        stmt = select(Product).where(product_table.c.item_number == item_number)
        return self.session.execute(stmt).scalar_one_or_none()

    def existing_item_numbers(self) -> frozenset[str]:
        return frozenset(self.session.execute(select(product_table.c.item_number)).scalars())

    def in_scope(self, scope: ProductScope) -> Sequence[Product]:
        stmt = _scoped(
            select(Product)
            .options(_product_loader())
            .order_by(product_table.c.item_number),
            scope,
        )
        return self.session.execute(stmt).scalars().all()

    def responsible_persons(self) -> Sequence[ResponsiblePerson]:
        name_column = product_table.c.responsible_person_name
        email_column = product_table.c.responsible_person_email
        stmt = select(name_column, email_column).distinct().order_by(name_column, email_column)
        return [ResponsiblePerson(name, email) for name, email in self.session.execute(stmt)]


class SqlAlchemyConflictRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Conflict) -> None:
        self.session.add(entity)

    def get(self, entity_id: UUID) -> Conflict | None:
        return self.session.get(Conflict, entity_id)

    def get_for_update(self, conflict_id: UUID) -> Conflict | None:
        """Load a conflict with its row locked for the rest of the transaction.

        Backends without row locks (SQLite) ignore ``FOR UPDATE``; their
        writes are serialised by the database-level lock instead.
        """

        stmt = (
            select(Conflict)
            .where(conflict_table.c.id == conflict_id)
            .options(*_conflict_loaders())
            .with_for_update()
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def delete(self, entity: Conflict) -> None:
        entity.product.remove_conflict(entity)
        self.session.delete(entity)

    def in_scope(self, scope: ProductScope) -> Sequence[Conflict]:
        stmt = _scoped(
            select(Conflict)
            .join(product_table, conflict_table.c.product_id == product_table.c.id)
            .options(*_conflict_loaders())
            .order_by(product_table.c.item_number, conflict_table.c.created_at),
            scope,
        )
        return self.session.execute(stmt).scalars().all()
