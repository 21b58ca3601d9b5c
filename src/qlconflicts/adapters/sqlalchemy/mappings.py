"""SQLAlchemy mapping metadata for the conflict domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from qlconflicts.domain.model import Conflict, ConflictType, Product, Resolution

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

product_table = Table(
    "product",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("item_number", String(64), nullable=False, unique=True),
    Column("category", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("overall_reason", Text, nullable=True),
    Column("overall_equal", Boolean, nullable=False, default=False),
    Column("responsible_person_name", String, nullable=False),
    Column("responsible_person_email", String, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_product_responsible_person_email", "responsible_person_email"),
)

conflict_table = Table(
    "conflict",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "product_id",
        UUIDColumnType,
        ForeignKey("product.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("conflict_type", Enum(ConflictType, native_enum=False, length=64), nullable=False),
    Column("quality_line_value", Text, nullable=True),
    Column("attribute_value", Text, nullable=True),
    Column("reason", Text, nullable=True),
    Column("is_equal", Boolean, nullable=False, default=False),
    Column("resolved_value", String, nullable=True),
    Column("resolution_comment", Text, nullable=True),
    Column("resolved_by", String, nullable=True),
    Column("resolved_at", UTCDateTime(), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_conflict_product_id", "product_id"),
)

resolution_table = Table(
    "resolution",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "conflict_id",
        UUIDColumnType,
        ForeignKey("conflict.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("selected_value", String, nullable=False),
    Column("comment", Text, nullable=False),
    Column("resolved_by", String, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_resolution_conflict_id", "conflict_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        Product,
        product_table,
        properties={
            "_conflicts": relationship(
                Conflict,
                back_populates="product",
                cascade="all, delete-orphan",
                order_by=conflict_table.c.created_at,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Conflict,
        conflict_table,
        properties={
            "product": relationship(Product, back_populates="_conflicts"),
            "_resolutions": relationship(
                Resolution,
                cascade="all, delete-orphan",
                order_by=resolution_table.c.created_at,
            ),
        },
    )

    mapper_registry.map_imperatively(Resolution, resolution_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
