"""Reconciliation defaults: dismissal semantics and classifier lexicon."""

from __future__ import annotations

from dataclasses import dataclass, field

from qlconflicts.domain.model import DismissalMode
from qlconflicts.domain.reconciliation.classify import DEFAULT_CLASSIFIER_CONFIG, ClassifierConfig
from qlconflicts.domain.reconciliation.lifecycle import SYSTEM_RESOLVER

from .env import env_list, optional_env_var
from .errors import InvalidConfigurationError


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    dismissal_mode: DismissalMode = DismissalMode.DELETE
    system_resolver: str = SYSTEM_RESOLVER
    classifier: ClassifierConfig = field(default_factory=lambda: DEFAULT_CLASSIFIER_CONFIG)


def get_reconcile_config() -> ReconcileConfig:
    mode_value = optional_env_var("QLCONFLICTS_DISMISSAL_MODE")
    mode = DismissalMode.DELETE
    if mode_value is not None:
        try:
            mode = DismissalMode(mode_value.lower())
        except ValueError as exc:
            expected = " or ".join(m.value for m in DismissalMode)
            raise InvalidConfigurationError(
                "QLCONFLICTS_DISMISSAL_MODE", mode_value, expected=expected
            ) from exc

    classifier = DEFAULT_CLASSIFIER_CONFIG
    extra_keywords = env_list("QLCONFLICTS_EXTRA_NOISE_KEYWORDS")
    if extra_keywords:
        classifier = classifier.with_keywords(*extra_keywords)

    return ReconcileConfig(
        dismissal_mode=mode,
        system_resolver=optional_env_var("QLCONFLICTS_SYSTEM_RESOLVER") or SYSTEM_RESOLVER,
        classifier=classifier,
    )
