"""``ConflictStore`` implementation on top of the SQLAlchemy unit of work."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from qlconflicts.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
from qlconflicts.domain.errors import ConflictNotFoundError, StorageError
from qlconflicts.domain.model import DISMISSED_SENTINEL

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from qlconflicts.domain.model import Conflict, ProductScope
    from qlconflicts.domain.ports.unit_of_work import ConflictUnitOfWork

log = logging.getLogger(__name__)


class SqlAlchemyConflictStore:
    """Each write runs in its own unit of work so one failure cannot undo another."""

    def __init__(
        self,
        unit_of_work_factory: Callable[[], ConflictUnitOfWork] = SqlAlchemyUnitOfWork,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory

    def fetch_conflicts(self, scope: ProductScope) -> Sequence[Conflict]:
        try:
            with self._unit_of_work_factory() as uow:
                return list(uow.repositories.conflicts.in_scope(scope))
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to fetch conflicts: {exc}") from exc

    def persist_resolution(
        self,
        conflict_id: UUID,
        resolved_value: str,
        *,
        comment: str,
        resolver: str,
    ) -> Conflict:
        try:
            with self._unit_of_work_factory() as uow:
                conflict = uow.repositories.conflicts.get_for_update(conflict_id)
                if conflict is None:
                    raise ConflictNotFoundError(conflict_id)
                conflict.record_resolution(resolved_value, comment=comment, resolver=resolver)
                uow.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to resolve conflict {conflict_id}: {exc}") from exc
        log.debug("Persisted resolution %r for conflict %s", resolved_value, conflict_id)
        return conflict

    def mark_dismissed(self, conflict_id: UUID, *, comment: str, resolver: str) -> bool:
        try:
            with self._unit_of_work_factory() as uow:
                conflict = uow.repositories.conflicts.get_for_update(conflict_id)
                if conflict is None:
                    raise ConflictNotFoundError(conflict_id)
                if conflict.is_dismissed:
                    return False
                conflict.record_resolution(DISMISSED_SENTINEL, comment=comment, resolver=resolver)
                uow.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to dismiss conflict {conflict_id}: {exc}") from exc
        log.debug("Marked conflict %s as dismissed", conflict_id)
        return True

    def delete_conflict(self, conflict_id: UUID) -> None:
        try:
            with self._unit_of_work_factory() as uow:
                conflict = uow.repositories.conflicts.get_for_update(conflict_id)
                if conflict is None:
                    raise ConflictNotFoundError(conflict_id)
                uow.repositories.conflicts.delete(conflict)
                uow.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to delete conflict {conflict_id}: {exc}") from exc
        log.debug("Deleted conflict %s", conflict_id)
