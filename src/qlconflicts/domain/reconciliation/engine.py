"""Batch re-evaluation of a population of conflicts.

Each conflict is classified independently and noise is dismissed through the
storage collaborator. Storage failures are collected per item so one bad row
cannot abort the batch; re-running the reconciler is always safe.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from qlconflicts.domain.errors import StorageError
from qlconflicts.domain.model import DismissalMode, NoiseCause

from .classify import DEFAULT_CLASSIFIER_CONFIG, ClassifierConfig, Noise, classify_conflict
from .lifecycle import SYSTEM_RESOLVER, dismiss_conflict

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from qlconflicts.domain.model import Conflict, ProductScope
    from qlconflicts.domain.ports.store import ConflictStore

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconciliationFailure:
    conflict_id: UUID
    message: str


@dataclass(slots=True, kw_only=True)
class ReconciliationReport:
    """Outcome of one reconciliation pass.

    ``surviving`` holds the conflicts that were kept; failed dismissals are
    reported in ``errors`` only.
    """

    total_scanned: int = 0
    dismissed: int = 0
    kept: int = 0
    already_dismissed: int = 0
    errors: list[ReconciliationFailure] = field(default_factory=list["ReconciliationFailure"])
    surviving: list[Conflict] = field(default_factory=list["Conflict"])
    dismissed_by_cause: Counter[NoiseCause] = field(default_factory=Counter["NoiseCause"])

    @property
    def surviving_ids(self) -> frozenset[UUID]:
        return frozenset(c.id for c in self.surviving)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


@dataclass(slots=True, kw_only=True)
class ConflictReconciler:
    store: ConflictStore
    config: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG
    mode: DismissalMode = DismissalMode.DELETE
    include_resolved: bool = False
    dry_run: bool = False
    resolver: str = SYSTEM_RESOLVER

    def reconcile(self, conflicts: Iterable[Conflict]) -> ReconciliationReport:
        report = ReconciliationReport()
        for conflict in conflicts:
            report.total_scanned += 1
            self._reconcile_one(conflict, report)

        log.info(
            "Reconciled %d conflicts: %d dismissed, %d kept, %d already dismissed, %d errors%s",
            report.total_scanned,
            report.dismissed,
            report.kept,
            report.already_dismissed,
            len(report.errors),
            " (dry run)" if self.dry_run else "",
        )
        return report

    def reconcile_scope(self, scope: ProductScope) -> ReconciliationReport:
        """Fetch the conflicts in ``scope`` through the store and reconcile them."""

        return self.reconcile(self.store.fetch_conflicts(scope))

    def _reconcile_one(self, conflict: Conflict, report: ReconciliationReport) -> None:
        if conflict.is_dismissed:
            report.already_dismissed += 1
            return
        if conflict.is_resolved and not self.include_resolved:
            report.kept += 1
            report.surviving.append(conflict)
            return

        verdict = classify_conflict(conflict, self.config)
        if not isinstance(verdict, Noise):
            report.kept += 1
            report.surviving.append(conflict)
            return

        if self.dry_run:
            log.info("Would dismiss conflict %s (%s)", conflict.id, verdict.cause)
            report.dismissed += 1
            report.dismissed_by_cause[verdict.cause] += 1
            return

        try:
            changed = dismiss_conflict(
                self.store,
                conflict,
                verdict.cause,
                mode=self.mode,
                resolver=self.resolver,
            )
        except StorageError as exc:
            log.warning("Failed to dismiss conflict %s: %s", conflict.id, exc)
            report.errors.append(ReconciliationFailure(conflict.id, str(exc)))
            return

        if changed:
            log.info(
                "Dismissed conflict %s (%s, %s)", conflict.id, conflict.conflict_type, verdict.cause
            )
            report.dismissed += 1
            report.dismissed_by_cause[verdict.cause] += 1
        else:
            report.already_dismissed += 1
