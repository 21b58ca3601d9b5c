"""Pydantic models describing the conflicts service payloads."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _stringify(value: object) -> object:
    # spreadsheet-imported cells come back as JSON numbers
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return str(value)
    return value


def _null_to_false(value: object) -> object:
    return False if value is None else value


class ConflictsApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LoginResponse(ConflictsApiBaseModel):
    token: str


class ErrorResponse(ConflictsApiBaseModel):
    error: str


class ResponsiblePersonPayload(ConflictsApiBaseModel):
    name: str = Field(alias="responsible_person_name")
    email: str = Field(alias="responsible_person_email")


class ConflictPayload(ConflictsApiBaseModel):
    id: int
    conflict_type: str
    quality_line_value: str | None = None
    attribute_value: str | None = None
    reason: str | None = None
    is_equal: bool = False
    resolved_value: str | None = None
    resolution_comment: str | None = None
    resolved_by: str | None = None
    resolved_at: datetime | None = None

    _stringify_values = field_validator("quality_line_value", "attribute_value", mode="before")(
        _stringify
    )
    _normalize_resolution = field_validator("resolved_value", "resolved_by", mode="before")(
        _blank_to_none
    )
    _normalize_is_equal = field_validator("is_equal", mode="before")(_null_to_false)


class ProductPayload(ConflictsApiBaseModel):
    id: int
    item_number: str
    category: str = ""
    description: str | None = None
    overall_reason: str | None = None
    overall_equal: bool = False
    responsible_person_name: str
    responsible_person_email: str
    created_at: datetime | None = None
    conflicts: list[ConflictPayload] = Field(default_factory=list["ConflictPayload"])

    _stringify_item_number = field_validator("item_number", mode="before")(_stringify)
    _normalize_overall_equal = field_validator("overall_equal", mode="before")(_null_to_false)

    @field_validator("category", mode="before")
    @classmethod
    def _null_category(cls, value: object) -> object:
        return "" if value is None else value


ProductListAdapter: TypeAdapter[list[ProductPayload]] = TypeAdapter(list[ProductPayload])
PersonListAdapter: TypeAdapter[list[ResponsiblePersonPayload]] = TypeAdapter(
    list[ResponsiblePersonPayload]
)
