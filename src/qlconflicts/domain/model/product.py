"""Products and the conflicts recorded between their two data sources.

Ownership:
- Product owns its Conflicts (deleting a product deletes them)
- Conflict owns its Resolution audit trail (append-only)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, NamedTuple

from qlconflicts.domain.model.entity import Entity
from qlconflicts.domain.model.enums import ConflictState, Selection

if TYPE_CHECKING:
    from qlconflicts.domain.model.enums import ConflictType

# Resolved value written when the system, not a human, dismisses a conflict.
DISMISSED_SENTINEL = "deleted"


def utcnow() -> datetime:
    return datetime.now(UTC)


class ResponsiblePerson(NamedTuple):
    name: str
    email: str


@dataclass(eq=False, kw_only=True)
class Product(Entity):
    item_number: str
    category: str
    responsible_person_name: str
    responsible_person_email: str
    description: str | None = None
    overall_reason: str | None = None
    overall_equal: bool = False
    created_at: datetime = field(default_factory=utcnow)

    _conflicts: list[Conflict] = field(default_factory=list["Conflict"], repr=False)

    @property
    def conflicts(self) -> tuple[Conflict, ...]:
        return tuple(self._conflicts)

    @property
    def responsible_person(self) -> ResponsiblePerson:
        return ResponsiblePerson(self.responsible_person_name, self.responsible_person_email)

    @property
    def open_conflicts(self) -> tuple[Conflict, ...]:
        return tuple(c for c in self._conflicts if c.state is ConflictState.OPEN)

    def add_conflict(
        self,
        conflict_type: ConflictType,
        *,
        quality_line_value: str | None = None,
        attribute_value: str | None = None,
        reason: str | None = None,
        is_equal: bool = False,
    ) -> Conflict:
        return Conflict(
            product=self,
            conflict_type=conflict_type,
            quality_line_value=quality_line_value,
            attribute_value=attribute_value,
            reason=reason,
            is_equal=is_equal,
        )

    def remove_conflict(self, conflict: Conflict) -> None:
        if conflict in self._conflicts:
            self._conflicts.remove(conflict)

    # Friend primitive (called by Conflict on construction)
    def _attach_conflict(self, conflict: Conflict) -> None:
        if conflict not in self._conflicts:
            self._conflicts.append(conflict)


@dataclass(eq=False, kw_only=True)
class Resolution(Entity):
    """Immutable audit record appended each time a conflict is resolved."""

    selected_value: str
    comment: str
    resolved_by: str
    created_at: datetime = field(default_factory=utcnow)


@dataclass(eq=False, kw_only=True)
class Conflict(Entity):
    """A discrepancy between the quality-line and attribute value of one dimension.

    The four resolution fields (``resolved_value``, ``resolution_comment``,
    ``resolved_by``, ``resolved_at``) are either all set or all unset. The
    lifecycle state is derived from them.
    """

    product: Product
    conflict_type: ConflictType
    quality_line_value: str | None = None
    attribute_value: str | None = None
    reason: str | None = None
    is_equal: bool = False
    resolved_value: str | None = None
    resolution_comment: str | None = None
    resolved_by: str | None = None
    resolved_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)

    _resolutions: list[Resolution] = field(default_factory=list["Resolution"], repr=False)

    def __post_init__(self) -> None:
        resolution_fields = (
            self.resolved_value,
            self.resolution_comment,
            self.resolved_by,
            self.resolved_at,
        )
        set_count = sum(value is not None for value in resolution_fields)
        if set_count not in (0, len(resolution_fields)):
            raise ValueError("resolution fields must be set together or not at all")
        self.product._attach_conflict(self)  # noqa: SLF001

    @property
    def state(self) -> ConflictState:
        if self.resolved_value is None:
            return ConflictState.OPEN
        if self.resolved_value == DISMISSED_SENTINEL:
            return ConflictState.DISMISSED
        return ConflictState.RESOLVED

    @property
    def is_resolved(self) -> bool:
        return self.state is ConflictState.RESOLVED

    @property
    def is_dismissed(self) -> bool:
        return self.state is ConflictState.DISMISSED

    @property
    def resolutions(self) -> tuple[Resolution, ...]:
        return tuple(self._resolutions)

    @property
    def selected_text(self) -> str | None:
        """Text of the side chosen by the current resolution, if a side was chosen."""

        if self.resolved_value == Selection.QUALITY_LINE:
            return self.quality_line_value
        if self.resolved_value == Selection.ATTRIBUTE:
            return self.attribute_value
        return None

    def record_resolution(
        self,
        value: str,
        *,
        comment: str | None,
        resolver: str,
        at: datetime | None = None,
    ) -> Resolution:
        """Overwrite the current resolution fields and append one audit record."""

        if not resolver.strip():
            raise ValueError("resolver must not be blank")
        timestamp = at or utcnow()
        comment_text = comment or ""
        self.resolved_value = value
        self.resolution_comment = comment_text
        self.resolved_by = resolver
        self.resolved_at = timestamp
        resolution = Resolution(
            selected_value=value,
            comment=comment_text,
            resolved_by=resolver,
            created_at=timestamp,
        )
        self._resolutions.append(resolution)
        return resolution
