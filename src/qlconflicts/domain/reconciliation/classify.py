"""Decide whether a recorded discrepancy is a real conflict or noise.

Rules are evaluated in a fixed order and the first match wins: structural and
sentinel checks come before the fuzzy textual heuristics.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING, Final, Literal

from qlconflicts.domain.model import ConflictType, NoiseCause

from .normalize import (
    DEFAULT_SCALE_FACTORS,
    is_abbreviation,
    is_spacing_only_difference,
    is_unit_conversion,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from qlconflicts.domain.model import Conflict

NOISE_KEYWORDS: Final[tuple[str, ...]] = (
    "wording",
    "formatting",
    "spacing",
    "units",
    "abbreviation",
    "expressed differently",
    "same",
    "equivalent",
    "minor",
    "extra details",
    "adds detail",
    "only spacing",
    "only differs",
    "wording differs",
    "spacing difference",
    "formatting difference",
)
MISSING_VALUE_SENTINELS: Final[frozenset[str]] = frozenset(
    {"No value provided", "Missing", "null", "undefined", ""}
)


@dataclass(frozen=True, slots=True, kw_only=True)
class ClassifierConfig:
    """Rule set used by :func:`classify`."""

    noise_keywords: tuple[str, ...] = NOISE_KEYWORDS
    scale_factors: tuple[float, ...] = DEFAULT_SCALE_FACTORS
    missing_sentinels: frozenset[str] = MISSING_VALUE_SENTINELS
    ignored_types: frozenset[str] = field(
        default_factory=lambda: frozenset({ConflictType.SPECIFICATIONS})
    )

    def with_keywords(self, *keywords: str) -> ClassifierConfig:
        folded = (k.casefold() for k in keywords if k)
        extra = tuple(k for k in dict.fromkeys(folded) if k not in self.noise_keywords)
        return replace(self, noise_keywords=self.noise_keywords + extra)


DEFAULT_CLASSIFIER_CONFIG: Final = ClassifierConfig()


class VerdictKind(StrEnum):
    REAL = "real"
    NOISE = "noise"


@dataclass(frozen=True, slots=True)
class RealConflict:
    """The two values genuinely disagree and need a human decision."""

    kind: Literal[VerdictKind.REAL] = VerdictKind.REAL


@dataclass(frozen=True, slots=True)
class Noise:
    """The difference is representational or a missing-data artifact."""

    cause: NoiseCause
    kind: Literal[VerdictKind.NOISE] = VerdictKind.NOISE


type Verdict = RealConflict | Noise


def classify(
    conflict_type: str,
    quality_line_value: str | None,
    attribute_value: str | None,
    reason: str | None,
    *,
    config: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG,
) -> Verdict:
    if conflict_type in config.ignored_types:
        return Noise(NoiseCause.SPECIFICATIONS_TYPE)

    quality_line = (quality_line_value or "").strip()
    attribute = (attribute_value or "").strip()
    if not quality_line and not attribute:
        return Noise(NoiseCause.BOTH_EMPTY)

    if quality_line in config.missing_sentinels or attribute in config.missing_sentinels:
        return Noise(NoiseCause.ONE_SIDE_MISSING)

    if quality_line == attribute:
        return Noise(NoiseCause.IDENTICAL_VALUES)

    if reason and _mentions_noise_keyword(reason, config.noise_keywords):
        return Noise(NoiseCause.REASON_KEYWORD)

    if is_unit_conversion(quality_line, attribute, config.scale_factors):
        return Noise(NoiseCause.UNIT_CONVERSION)

    if is_spacing_only_difference(quality_line, attribute):
        return Noise(NoiseCause.SPACING_ONLY)

    if is_abbreviation(quality_line, attribute):
        return Noise(NoiseCause.ABBREVIATION)

    return RealConflict()


def classify_conflict(
    conflict: Conflict, config: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG
) -> Verdict:
    return classify(
        conflict.conflict_type,
        conflict.quality_line_value,
        conflict.attribute_value,
        conflict.reason,
        config=config,
    )


def real_conflicts(
    conflicts: Iterable[Conflict], config: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG
) -> list[Conflict]:
    """Drop noise so a reviewer only sees genuine disagreements."""

    return [c for c in conflicts if isinstance(classify_conflict(c, config), RealConflict)]


def _mentions_noise_keyword(reason: str, keywords: Iterable[str]) -> bool:
    folded = reason.casefold()
    return any(keyword.casefold() in folded for keyword in keywords)
