"""Page geometry and column cursors for the door measurement report.

Pure-maths helpers that keep the layout engine focused on content rather
than layout arithmetic.  All coordinates are PDF points with the origin at
the bottom-left corner, so write cursors move downwards by decreasing ``y``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .report_data import Column

FONT = "Helvetica"
FONT_B = "Helvetica-Bold"
FS_TITLE = 18
FS_SECTION = 14
FS_META = 9
FS_FOOTER = 9
FS_TABLE = 8

# Mode, site, scope and generation date lines under the report title.
META_LINE_COUNT = 4


@dataclass(frozen=True, slots=True)
class ReportGeometry:
    page_width: float = 595
    page_height: float = 842
    margin: float = 40
    row_height: float = 16
    column_gap: float = 15
    bottom_reserve: float = 60
    title_advance: float = 25
    meta_advance: float = 15
    meta_block_gap: float = 30
    section_title_advance: float = 25
    header_rule_drop: float = 3
    header_row_advance: float = 15
    footer_offset: float = 15
    total_label_width: float = 100
    # x offsets inside a column: building, flat, length, breadth
    grouped_field_offsets: tuple[float, float, float, float] = (0, 50, 115, 190)
    # x offsets inside a column: flat, length, breadth
    flat_field_offsets: tuple[float, float, float] = (0, 135, 205)

    def __post_init__(self) -> None:
        if self.page_width <= 2 * self.margin + self.column_gap:
            raise ValueError(
                f"page_width={self.page_width} leaves no room for two columns "
                f"with margin={self.margin} and column_gap={self.column_gap}"
            )
        if self.row_height <= 0:
            raise ValueError(f"row_height must be positive, got {self.row_height!r}")
        if self.rows_per_column(first_page=False) < 1:
            raise ValueError(
                f"page_height={self.page_height} cannot fit a single table row "
                "on a continuation page"
            )

    # -- columns ---------------------------------------------------------------

    @property
    def column_width(self) -> float:
        return (self.page_width - 2 * self.margin - self.column_gap) / 2

    def column_x(self, column: Column) -> float:
        if column == "left":
            return self.margin
        return self.margin + self.column_width + self.column_gap

    # -- vertical landmarks ----------------------------------------------------

    @property
    def content_top(self) -> float:
        return self.page_height - self.margin

    @property
    def break_floor(self) -> float:
        """Rows may not start below this y; a new page is opened instead."""
        return self.margin + self.bottom_reserve

    @property
    def footer_y(self) -> float:
        return self.margin + self.footer_offset

    @property
    def header_row_height(self) -> float:
        return self.header_rule_drop + self.header_row_advance

    @property
    def first_table_top(self) -> float:
        return (
            self.content_top
            - self.title_advance
            - (META_LINE_COUNT - 1) * self.meta_advance
            - self.meta_block_gap
            - self.section_title_advance
        )

    @property
    def continuation_table_top(self) -> float:
        return self.content_top - self.section_title_advance

    # -- capacity --------------------------------------------------------------

    def rows_per_column(self, *, first_page: bool) -> int:
        top = self.first_table_top if first_page else self.continuation_table_top
        first_row_y = top - self.header_row_height
        if first_row_y < self.break_floor:
            return 0
        return math.floor((first_row_y - self.break_floor) / self.row_height + 1e-9) + 1

    def entries_per_page(self, *, first_page: bool) -> int:
        return 2 * self.rows_per_column(first_page=first_page)

    def section_page_count(self, entry_count: int) -> int:
        """Pages a section with *entry_count* rows occupies."""
        first = self.entries_per_page(first_page=True)
        if entry_count <= first:
            return 1
        later = self.entries_per_page(first_page=False)
        return 1 + math.ceil((entry_count - first) / later)


@dataclass(slots=True)
class ColumnCursor:
    """Write cursor for one table column on the current page."""

    column: Column
    x: float
    y: float
    header_drawn: bool = False

    def has_room(self, geometry: ReportGeometry) -> bool:
        return self.y >= geometry.break_floor

    def advance(self, amount: float) -> None:
        self.y -= amount


@dataclass(slots=True)
class ColumnPair:
    left: ColumnCursor
    right: ColumnCursor

    @classmethod
    def at(cls, geometry: ReportGeometry, y: float) -> ColumnPair:
        return cls(
            left=ColumnCursor("left", geometry.column_x("left"), y),
            right=ColumnCursor("right", geometry.column_x("right"), y),
        )

    def get(self, column: Column) -> ColumnCursor:
        return self.left if column == "left" else self.right

    def reset(self, y: float) -> None:
        """Move both cursors to *y* and forget both headers together."""
        for cursor in (self.left, self.right):
            cursor.y = y
            cursor.header_drawn = False


def column_for_index(index: int) -> Column:
    return "left" if index % 2 == 0 else "right"
