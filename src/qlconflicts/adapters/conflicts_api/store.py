"""``ConflictStore`` backed by the conflicts service REST API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from qlconflicts.domain.errors import ConflictNotFoundError, StorageError
from qlconflicts.domain.model import DISMISSED_SENTINEL

from .client import ConflictsApiClient, ConflictsApiError
from .translator import conflict_uuid, parse_product

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from qlconflicts.domain.model import Conflict, ProductScope

log = getLogger(__name__)


class RemoteConflictStore:
    """Conflicts fetched through this store can be resolved or deleted through it.

    Remote integer ids are kept in an index keyed by the derived domain id.
    """

    def __init__(self, client: ConflictsApiClient | None = None) -> None:
        self._client = client or ConflictsApiClient()
        self._index: dict[UUID, tuple[int, Conflict]] = {}

    def close(self) -> None:
        self._client.close()

    def fetch_conflicts(self, scope: ProductScope) -> Sequence[Conflict]:
        try:
            if scope.responsible_email is not None:
                emails = [scope.responsible_email]
            else:
                emails = [person.email for person in self._client.responsible_persons()]
            conflicts: list[Conflict] = []
            for email in emails:
                for payload in self._client.products_for(email):
                    product = parse_product(payload)
                    if not scope.includes(product):
                        continue
                    remote_ids = {conflict_uuid(c.id): c.id for c in payload.conflicts}
                    for conflict in product.conflicts:
                        self._index[conflict.id] = (remote_ids[conflict.id], conflict)
                        conflicts.append(conflict)
        except ConflictsApiError as exc:
            raise StorageError(f"Failed to fetch conflicts: {exc}") from exc
        log.info("Fetched %d conflicts for %d responsible persons", len(conflicts), len(emails))
        return conflicts

    def persist_resolution(
        self,
        conflict_id: UUID,
        resolved_value: str,
        *,
        comment: str,
        resolver: str,
    ) -> Conflict:
        remote_id, conflict = self._lookup(conflict_id)
        try:
            self._client.resolve_conflict(
                remote_id, resolved_value, comment=comment, resolver=resolver
            )
        except ConflictsApiError as exc:
            if exc.status_code == httpx.codes.NOT_FOUND:
                self._forget(conflict_id)
                raise ConflictNotFoundError(conflict_id) from exc
            raise StorageError(f"Failed to resolve conflict {conflict_id}: {exc}") from exc
        conflict.record_resolution(resolved_value, comment=comment, resolver=resolver)
        return conflict

    def mark_dismissed(self, conflict_id: UUID, *, comment: str, resolver: str) -> bool:
        _remote_id, conflict = self._lookup(conflict_id)
        if conflict.is_dismissed:
            return False
        self.persist_resolution(conflict_id, DISMISSED_SENTINEL, comment=comment, resolver=resolver)
        return True

    def delete_conflict(self, conflict_id: UUID) -> None:
        remote_id, _conflict = self._lookup(conflict_id)
        try:
            deleted = self._client.delete_conflict(remote_id)
        except ConflictsApiError as exc:
            raise StorageError(f"Failed to delete conflict {conflict_id}: {exc}") from exc
        self._forget(conflict_id)
        if not deleted:
            raise ConflictNotFoundError(conflict_id)

    def _lookup(self, conflict_id: UUID) -> tuple[int, Conflict]:
        entry = self._index.get(conflict_id)
        if entry is None:
            raise ConflictNotFoundError(conflict_id)
        return entry

    def _forget(self, conflict_id: UUID) -> None:
        entry = self._index.pop(conflict_id, None)
        if entry is not None:
            _remote_id, conflict = entry
            conflict.product.remove_conflict(conflict)
