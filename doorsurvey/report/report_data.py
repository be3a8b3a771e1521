"""Intermediate data model for the door measurement report.

``ReportEntry`` rows come out of the grouping stage; the layout engine turns
them into a ``ReportDocument`` of pages holding positioned draw operations,
which the Canvas-based renderer replays onto a PDF.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..domain_models import DoorCategory

Column = Literal["left", "right"]


@dataclass(frozen=True, slots=True)
class ReportEntry:
    flat_label: str
    height_value: float
    width_value: float
    group_label: str | None = None


@dataclass(frozen=True, slots=True)
class GroupedMeasurements:
    primary: tuple[ReportEntry, ...] = ()
    secondary: tuple[ReportEntry, ...] = ()
    entry: tuple[ReportEntry, ...] = ()

    def for_category(self, category: DoorCategory) -> tuple[ReportEntry, ...]:
        if category is DoorCategory.PRIMARY:
            return self.primary
        if category is DoorCategory.SECONDARY:
            return self.secondary
        return self.entry

    @property
    def grand_total(self) -> int:
        return len(self.primary) + len(self.secondary) + len(self.entry)


# ---------------------------------------------------------------------------
# Draw operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DrawText:
    x: float
    y: float
    text: str
    font: str
    size: float
    color: str


@dataclass(frozen=True, slots=True)
class DrawLine:
    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    color: str


DrawOp = DrawText | DrawLine


@dataclass(frozen=True, slots=True)
class RowPlacement:
    """Where one table row landed; kept alongside the draw operations."""

    category: DoorCategory
    index: int
    column: Column
    y: float
    entry: ReportEntry


@dataclass
class ReportPage:
    width: float
    height: float
    ops: list[DrawOp] = field(default_factory=list)
    rows: list[RowPlacement] = field(default_factory=list)

    def texts(self) -> list[str]:
        return [op.text for op in self.ops if isinstance(op, DrawText)]


@dataclass
class ReportDocument:
    title: str
    subject: str = ""
    pages: list[ReportPage] = field(default_factory=list)

    def new_page(self, width: float, height: float) -> ReportPage:
        page = ReportPage(width=width, height=height)
        self.pages.append(page)
        return page
