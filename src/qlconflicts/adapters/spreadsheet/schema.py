"""Pydantic models for rows of the conflict report spreadsheet."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from qlconflicts.domain.model import ConflictType

YES = "Yes"


def quality_line_column(conflict_type: ConflictType) -> str:
    return f"{conflict_type} (quality_lines)"


def attribute_column(conflict_type: ConflictType) -> str:
    return f"{conflict_type} (attributes)"


def equal_column(conflict_type: ConflictType) -> str:
    return f"{conflict_type} equal"


def reason_column(conflict_type: ConflictType) -> str:
    return f"{conflict_type} reason"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _yes_flag(value: object) -> bool:
    return isinstance(value, str) and value.strip() == YES


class SpreadsheetBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ConflictCells(SpreadsheetBaseModel):
    quality_line: str | None = None
    attribute: str | None = None
    equal: bool = False
    reason: str | None = None

    _normalize_text = field_validator("quality_line", "attribute", "reason", mode="before")(
        _blank_to_none
    )
    _normalize_equal = field_validator("equal", mode="before")(_yes_flag)

    @property
    def differs(self) -> bool:
        return (self.quality_line or "") != (self.attribute or "")


class ProductRow(SpreadsheetBaseModel):
    item_number: str
    category: str = ""
    overall_reason: str | None = None
    overall_equal: bool = False
    name: str = Field(alias="Name")
    email: str = Field(alias="Email")
    cells: dict[ConflictType, ConflictCells] = Field(
        default_factory=dict["ConflictType", "ConflictCells"]
    )

    _normalize_reason = field_validator("overall_reason", mode="before")(_blank_to_none)
    _normalize_overall_equal = field_validator("overall_equal", mode="before")(_yes_flag)

    @field_validator("category", mode="before")
    @classmethod
    def _null_category(cls, value: object) -> object:
        return "" if value is None else value

    @model_validator(mode="before")
    @classmethod
    def _collect_conflict_columns(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        row = cast(Mapping[str, object], value)
        data: dict[str, object] = dict(row)
        data["cells"] = {
            conflict_type: {
                "quality_line": row.get(quality_line_column(conflict_type)),
                "attribute": row.get(attribute_column(conflict_type)),
                "equal": row.get(equal_column(conflict_type)),
                "reason": row.get(reason_column(conflict_type)),
            }
            for conflict_type in ConflictType
        }
        return data
