"""Domain model objects for the door survey report.

Typed, immutable dataclasses for the records handed to the report engine,
plus ``from_dict`` constructors for the JSON shape used by the CLI and the
HTTP API.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class ReportRequestError(ValueError):
    """Raised when report input is missing data the engine depends on."""


class ReportGenerationError(RuntimeError):
    """Raised when composing or rendering a report document fails."""


# ---------------------------------------------------------------------------
# 1) DoorCategory
# ---------------------------------------------------------------------------


class DoorCategory(str, Enum):
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"
    ENTRY = "ENTRY"


# Stored door types map onto the three report categories.
CATEGORY_ALIASES: dict[str, DoorCategory] = {
    "BEDROOM": DoorCategory.PRIMARY,
    "BATHROOM": DoorCategory.SECONDARY,
    "MAIN_ENTRY": DoorCategory.ENTRY,
    "PRIMARY": DoorCategory.PRIMARY,
    "SECONDARY": DoorCategory.SECONDARY,
    "ENTRY": DoorCategory.ENTRY,
}

SECTION_ORDER: tuple[DoorCategory, ...] = (
    DoorCategory.PRIMARY,
    DoorCategory.SECONDARY,
    DoorCategory.ENTRY,
)


def parse_category(raw: object) -> DoorCategory | None:
    """Resolve *raw* to a :class:`DoorCategory`, or ``None`` if unrecognised."""
    if isinstance(raw, DoorCategory):
        return raw
    if not isinstance(raw, str):
        return None
    return CATEGORY_ALIASES.get(raw.strip().upper())


def _require_measurement(data: dict[str, Any], *keys: str) -> float:
    for key in keys:
        if key in data and data[key] is not None:
            try:
                value = float(data[key])
            except (TypeError, ValueError):
                raise ReportRequestError(f"{key} must be a number, got {data[key]!r}") from None
            if not math.isfinite(value) or value < 0:
                raise ReportRequestError(f"{key} must be a non-negative number, got {value!r}")
            return value
    raise ReportRequestError(f"Missing measurement field: {keys[0]}")


# ---------------------------------------------------------------------------
# 2) MeasurementRecord
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MeasurementRecord:
    flat_label: str
    height_value: float
    width_value: float
    # Kept as the raw string when unrecognised; grouping drops it.
    category: DoorCategory | str
    group_label: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MeasurementRecord:
        if not isinstance(data, dict):
            raise ReportRequestError("Measurement record must be a JSON object")
        flat_label = str(data.get("flat_label") or data.get("flatNo") or "").strip()
        if not flat_label:
            raise ReportRequestError("Measurement record is missing flat_label")
        raw_category = data.get("category") or data.get("doorType") or ""
        category = parse_category(raw_category) or str(raw_category)
        group = data.get("group_label") or data.get("buildingName")
        return cls(
            flat_label=flat_label,
            height_value=_require_measurement(data, "height_value", "lengthInches"),
            width_value=_require_measurement(data, "width_value", "breadthInches"),
            category=category,
            group_label=str(group) if group is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        category = self.category
        return {
            "flat_label": self.flat_label,
            "group_label": self.group_label,
            "height_value": self.height_value,
            "width_value": self.width_value,
            "category": category.value if isinstance(category, DoorCategory) else category,
        }


# ---------------------------------------------------------------------------
# 3) ReportRequest
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ReportRequest:
    site_label: str
    group_labels: tuple[str, ...]
    use_accurate_values: bool = False
    records: tuple[MeasurementRecord, ...] = field(default_factory=tuple)
    lang: str = "en"
    generated_on: date | None = None

    def __post_init__(self) -> None:
        if not str(self.site_label).strip():
            raise ReportRequestError("site_label is required")
        if not self.group_labels:
            raise ReportRequestError("At least one group label is required")

    @property
    def multi_group(self) -> bool:
        return len(self.group_labels) > 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReportRequest:
        if not isinstance(data, dict):
            raise ReportRequestError("Report request must be a JSON object")
        site_label = str(data.get("site_label") or data.get("siteName") or "").strip()
        raw_groups = data.get("group_labels", data.get("buildingNames"))
        if not isinstance(raw_groups, list) or not raw_groups:
            raise ReportRequestError("group_labels must be a non-empty list")
        raw_records = data.get("records") or []
        if not isinstance(raw_records, list):
            raise ReportRequestError("records must be a list")
        accurate = data.get("use_accurate_values", data.get("isAccurate"))
        if accurate is None:
            accurate = False
        if not isinstance(accurate, bool):
            raise ReportRequestError(
                f"use_accurate_values must be true or false, got {accurate!r}"
            )
        generated_raw = data.get("generated_on")
        try:
            generated_on = date.fromisoformat(generated_raw) if generated_raw else None
        except (TypeError, ValueError):
            raise ReportRequestError(f"Invalid generated_on date: {generated_raw!r}") from None
        return cls(
            site_label=site_label,
            group_labels=tuple(str(g) for g in raw_groups),
            use_accurate_values=accurate,
            records=tuple(MeasurementRecord.from_dict(r) for r in raw_records),
            lang=str(data.get("lang") or "en"),
            generated_on=generated_on,
        )
