"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ConflictType(StrEnum):
    """Catalog dimensions on which quality-line and attribute records are compared."""

    VARIANT = "Color/Scent/Flavor or any form of variant/assortis"
    SIZE = "Size"
    CAPACITY = "Capacity"
    WEIGHT = "Weight"
    MATERIAL = "Material"
    LIGHT_COLOR = "Light Color"
    MODES_SETTINGS = "Modes/Settings"
    CONTENT = "Content"
    SPECIFICATIONS = "Specifications"
    DESCRIPTION = "Description"
    PACKAGING = "Packaging"
    PRINTING = "Printing"
    BATTERY = "Battery"
    POWER = "Power"
    INPUT = "Input"
    OUTPUT = "Output"
    VOLTAGE = "Voltage"
    CHARGING_TIME = "Charging Time"
    USE_TIME = "Use Time"
    CABLE_CONNECTOR = "Cable/Connector"
    WATERPROOF_RATING = "Waterproof Rating"
    COMPATIBILITY = "Compatibility"
    TEMPERATURE_HEATING = "Temperature/Heating"
    SOLAR_SPECS = "Solar Specs"


class Selection(StrEnum):
    """Which side a human picked when resolving a conflict."""

    QUALITY_LINE = "quality_line"
    ATTRIBUTE = "attribute"


class ConflictState(StrEnum):
    OPEN = "open"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class NoiseCause(StrEnum):
    """Why a recorded discrepancy was judged to be noise."""

    SPECIFICATIONS_TYPE = "specifications_type"
    BOTH_EMPTY = "both_empty"
    ONE_SIDE_MISSING = "one_side_missing"
    IDENTICAL_VALUES = "identical_values"
    REASON_KEYWORD = "reason_keyword"
    UNIT_CONVERSION = "unit_conversion"
    SPACING_ONLY = "spacing_only"
    ABBREVIATION = "abbreviation"


class DismissalMode(StrEnum):
    """How an automatically dismissed conflict is represented afterwards."""

    DELETE = "delete"
    MARK = "mark"
