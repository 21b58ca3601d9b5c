"""Lifecycle transitions of a conflict: human resolution and automatic dismissal.

States are derived from the resolution fields (see ``Conflict.state``):

- ``OPEN`` -> ``RESOLVED`` via :func:`resolve_conflict`
- ``RESOLVED`` -> ``RESOLVED`` via :func:`resolve_conflict` (overwrites, appends history)
- ``OPEN`` -> ``DISMISSED`` via :func:`dismiss_conflict`, either by hard deletion
  or by writing the ``deleted`` sentinel
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from qlconflicts.domain.errors import ConflictNotFoundError, InvalidSelectionError
from qlconflicts.domain.model import DISMISSED_SENTINEL, DismissalMode, NoiseCause, Selection

if TYPE_CHECKING:
    from uuid import UUID

    from qlconflicts.domain.model import Conflict
    from qlconflicts.domain.ports.store import ConflictStore

log = logging.getLogger(__name__)

SYSTEM_RESOLVER: Final = "System Cleanup"

_CAUSE_DESCRIPTIONS: Final[dict[NoiseCause, str]] = {
    NoiseCause.SPECIFICATIONS_TYPE: "specifications not relevant",
    NoiseCause.BOTH_EMPTY: "both values empty",
    NoiseCause.ONE_SIDE_MISSING: "one side missing data",
    NoiseCause.IDENTICAL_VALUES: "identical values",
    NoiseCause.REASON_KEYWORD: "formatting/wording difference",
    NoiseCause.UNIT_CONVERSION: "unit conversion",
    NoiseCause.SPACING_ONLY: "spacing difference",
    NoiseCause.ABBREVIATION: "abbreviation difference",
}


def parse_selection(selection: str) -> Selection:
    try:
        return Selection(selection)
    except ValueError as exc:
        raise InvalidSelectionError(selection) from exc


def dismissal_comment(cause: NoiseCause) -> str:
    return f"Automatically deleted - {_CAUSE_DESCRIPTIONS[cause]}, not a real conflict"


def resolve_conflict(
    store: ConflictStore,
    conflict_id: UUID,
    selection: str,
    *,
    comment: str | None,
    resolver: str,
) -> Conflict:
    """Record a human's choice between the quality-line and attribute value.

    Raises ``InvalidSelectionError`` before anything is written when
    ``selection`` is not one of the two recognised tokens.
    """

    chosen = parse_selection(selection)
    if not resolver.strip():
        raise ValueError("resolver must not be blank")
    conflict = store.persist_resolution(
        conflict_id,
        chosen.value,
        comment=comment or "",
        resolver=resolver,
    )
    log.info("Conflict %s resolved to %s by %s", conflict_id, chosen, resolver)
    return conflict


def dismiss_conflict(
    store: ConflictStore,
    conflict: Conflict,
    cause: NoiseCause,
    *,
    mode: DismissalMode = DismissalMode.DELETE,
    resolver: str = SYSTEM_RESOLVER,
) -> bool:
    """Dismiss a noise conflict. Returns ``False`` when there was nothing left to do.

    The store decides against its own copy of the conflict, so dismissing the
    same conflict again is a no-op even when ``conflict`` is a stale snapshot.
    After a write ``conflict`` is brought in line with what was stored.
    """

    if conflict.is_dismissed:
        return False
    comment = dismissal_comment(cause)
    try:
        if mode is DismissalMode.DELETE:
            store.delete_conflict(conflict.id)
            changed = True
        else:
            changed = store.mark_dismissed(conflict.id, comment=comment, resolver=resolver)
    except ConflictNotFoundError:
        log.debug("Conflict %s already gone; nothing to dismiss", conflict.id)
        conflict.product.remove_conflict(conflict)
        return False

    if mode is DismissalMode.DELETE:
        conflict.product.remove_conflict(conflict)
    elif changed and not conflict.is_dismissed:
        conflict.record_resolution(DISMISSED_SENTINEL, comment=comment, resolver=resolver)
    return changed
