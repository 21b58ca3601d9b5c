"""Translate conflicts service payloads into domain entities."""

from __future__ import annotations

import uuid
from logging import getLogger
from typing import TYPE_CHECKING, Final

from qlconflicts.domain.model import Conflict, ConflictType, Product, utcnow

if TYPE_CHECKING:
    from .schema import ConflictPayload, ProductPayload

log = getLogger(__name__)

# Remote rows carry integer ids; domain ids are derived from them deterministically.
REMOTE_ID_NAMESPACE: Final = uuid.UUID("0b6f2b8e-6d8c-5a3c-9a57-3f0e8c7d1a42")
UNKNOWN_RESOLVER: Final = "unknown"


def product_uuid(remote_id: int) -> uuid.UUID:
    return uuid.uuid5(REMOTE_ID_NAMESPACE, f"product:{remote_id}")


def conflict_uuid(remote_id: int) -> uuid.UUID:
    return uuid.uuid5(REMOTE_ID_NAMESPACE, f"conflict:{remote_id}")


def parse_product(payload: ProductPayload) -> Product:
    product = Product(
        id=product_uuid(payload.id),
        item_number=payload.item_number,
        category=payload.category,
        description=payload.description,
        overall_reason=payload.overall_reason,
        overall_equal=payload.overall_equal,
        responsible_person_name=payload.responsible_person_name,
        responsible_person_email=payload.responsible_person_email,
        created_at=payload.created_at or utcnow(),
    )
    for conflict_payload in payload.conflicts:
        parse_conflict(conflict_payload, product)
    return product


def parse_conflict(payload: ConflictPayload, product: Product) -> Conflict | None:
    """Attach the conflict described by ``payload`` to ``product``.

    Unknown conflict types are skipped. Partially filled resolution fields are
    completed so the all-or-none invariant holds.
    """

    try:
        conflict_type = ConflictType(payload.conflict_type)
    except ValueError:
        log.warning(
            "Skipping conflict %s of unknown type %r", payload.id, payload.conflict_type
        )
        return None

    resolved_value = payload.resolved_value
    comment = payload.resolution_comment
    resolver = payload.resolved_by
    resolved_at = payload.resolved_at
    if resolved_value is None:
        if comment is not None or resolver is not None or resolved_at is not None:
            log.warning(
                "Conflict %s has resolution details but no value; treating as open", payload.id
            )
        comment = resolver = resolved_at = None
    elif comment is None or resolver is None or resolved_at is None:
        log.warning(
            "Conflict %s has incomplete resolution fields; filling defaults", payload.id
        )
        comment = comment or ""
        resolver = resolver or UNKNOWN_RESOLVER
        resolved_at = resolved_at or utcnow()

    return Conflict(
        id=conflict_uuid(payload.id),
        product=product,
        conflict_type=conflict_type,
        quality_line_value=payload.quality_line_value,
        attribute_value=payload.attribute_value,
        reason=payload.reason,
        is_equal=payload.is_equal,
        resolved_value=resolved_value,
        resolution_comment=comment,
        resolved_by=resolver,
        resolved_at=resolved_at,
    )
