"""Pydantic request/response models for the door survey HTTP API.

Separated from the route modules to keep routing logic distinct from data
contracts.  Numeric validation happens here, before records reach the
report engine.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .domain_models import MeasurementRecord, ReportRequest

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class MeasurementRecordModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    flat_label: str = Field(min_length=1, max_length=64, alias="flatNo")
    group_label: str | None = Field(default=None, max_length=128, alias="buildingName")
    height_value: float = Field(ge=0, allow_inf_nan=False, alias="lengthInches")
    width_value: float = Field(ge=0, allow_inf_nan=False, alias="breadthInches")
    # Any shape on purpose: missing or unrecognised categories are dropped by the engine.
    category: Any = Field(default=None, alias="doorType")

    def to_domain(self) -> MeasurementRecord:
        return MeasurementRecord.from_dict(self.model_dump())


class ReportPdfRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    site_label: str = Field(min_length=1, max_length=128, alias="siteName")
    group_labels: list[str] = Field(min_length=1, alias="buildingNames")
    use_accurate_values: bool = Field(default=False, alias="isAccurate")
    records: list[MeasurementRecordModel] = Field(default_factory=list)
    lang: str | None = Field(default=None, pattern="^(en|nl)$")
    generated_on: date | None = None

    def to_domain(self, default_lang: str = "en") -> ReportRequest:
        return ReportRequest(
            site_label=self.site_label,
            group_labels=tuple(self.group_labels),
            use_accurate_values=self.use_accurate_values,
            records=tuple(r.to_domain() for r in self.records),
            lang=self.lang or default_lang,
            generated_on=self.generated_on,
        )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    status: str
    version: str
