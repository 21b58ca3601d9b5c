"""Conflict classification and resolution-lifecycle engine.

Flow: normalize -> classify -> lifecycle transition -> batch reconcile.
"""

from __future__ import annotations

from .classify import (
    DEFAULT_CLASSIFIER_CONFIG,
    ClassifierConfig,
    Noise,
    RealConflict,
    Verdict,
    VerdictKind,
    classify,
    classify_conflict,
    real_conflicts,
)
from .engine import ConflictReconciler, ReconciliationFailure, ReconciliationReport
from .lifecycle import (
    SYSTEM_RESOLVER,
    dismiss_conflict,
    dismissal_comment,
    parse_selection,
    resolve_conflict,
)
from .normalize import (
    extract_numeric,
    is_abbreviation,
    is_spacing_only_difference,
    is_unit_conversion,
    strip_spacing,
)

__all__ = [
    "DEFAULT_CLASSIFIER_CONFIG",
    "SYSTEM_RESOLVER",
    "ClassifierConfig",
    "ConflictReconciler",
    "Noise",
    "RealConflict",
    "ReconciliationFailure",
    "ReconciliationReport",
    "Verdict",
    "VerdictKind",
    "classify",
    "classify_conflict",
    "dismiss_conflict",
    "dismissal_comment",
    "extract_numeric",
    "is_abbreviation",
    "is_spacing_only_difference",
    "is_unit_conversion",
    "parse_selection",
    "real_conflicts",
    "resolve_conflict",
    "strip_spacing",
]
