"""Text normalisation helpers used to recognise representational differences.

Every function here is total: ``None`` is treated as the empty string and no
input raises.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_SCALE_FACTORS: Final[tuple[float, ...]] = (1.0, 10.0, 100.0, 1000.0)
MAX_ABBREVIATION_WORD_GAP: Final = 2

_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?", re.ASCII)
_WHITESPACE_PATTERN = re.compile(r"\s+")


def strip_spacing(value: str | None) -> str:
    """Remove all whitespace and case-fold."""

    if not value:
        return ""
    return _WHITESPACE_PATTERN.sub("", value).casefold()


def extract_numeric(value: str | None) -> tuple[float, ...]:
    """Return every decimal number in ``value`` in order of appearance."""

    if not value:
        return ()
    return tuple(float(token) for token in _NUMBER_PATTERN.findall(value))


def is_unit_conversion(
    a: str | None,
    b: str | None,
    scale_factors: Iterable[float] = DEFAULT_SCALE_FACTORS,
) -> bool:
    """Whether both sides carry one number that matches after a fixed scale factor.

    Strings with zero or several numbers never match.
    """

    numbers_a = extract_numeric(a)
    numbers_b = extract_numeric(b)
    if len(numbers_a) != 1 or len(numbers_b) != 1:
        return False
    (x,) = numbers_a
    (y,) = numbers_b
    return any(
        math.isclose(x * factor, y, rel_tol=1e-9) or math.isclose(x, y * factor, rel_tol=1e-9)
        for factor in scale_factors
    )


def is_spacing_only_difference(a: str | None, b: str | None) -> bool:
    return strip_spacing(a) == strip_spacing(b)


def is_abbreviation(a: str | None, b: str | None) -> bool:
    """Whether the shorter word list is contained word-by-word in the longer one.

    A word matches when it is a substring of, or contains, some word of the
    other side. Word counts differing by more than two never match.
    """

    words_a = (a or "").casefold().split()
    words_b = (b or "").casefold().split()
    if abs(len(words_a) - len(words_b)) > MAX_ABBREVIATION_WORD_GAP:
        return False
    shorter, longer = (words_a, words_b) if len(words_a) <= len(words_b) else (words_b, words_a)
    return all(
        any(word in long_word or long_word in word for long_word in longer) for word in shorter
    )
