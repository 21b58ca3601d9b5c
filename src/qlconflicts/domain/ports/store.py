"""Storage collaborator consumed by the conflict engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from qlconflicts.domain.model import Conflict, ProductScope


@runtime_checkable
class ConflictStore(Protocol):
    """Reads conflicts and writes lifecycle decisions back.

    Implementations serialise the read-modify-write of one conflict's
    resolution fields and raise ``ConflictNotFoundError`` for missing
    conflicts and ``StorageError`` for transient failures.
    """

    def fetch_conflicts(self, scope: ProductScope) -> Sequence[Conflict]: ...

    def persist_resolution(
        self,
        conflict_id: UUID,
        resolved_value: str,
        *,
        comment: str,
        resolver: str,
    ) -> Conflict: ...

    def mark_dismissed(self, conflict_id: UUID, *, comment: str, resolver: str) -> bool:
        """Write the dismissal sentinel unless the stored conflict already holds it.

        Returns ``False`` when nothing was written.
        """
        ...

    def delete_conflict(self, conflict_id: UUID) -> None: ...
