"""Shared logging helpers."""

from __future__ import annotations

import logging

from .env import optional_env_var


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``LOG_LEVEL`` from the environment, falling back to INFO, and the
    format is terse enough for CLI output. Pass ``force=True`` to reconfigure during
    tests or specialised entry points.
    """

    resolved = level if level is not None else (optional_env_var("LOG_LEVEL") or logging.INFO)
    if isinstance(resolved, str):
        resolved = resolved.upper()

    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
