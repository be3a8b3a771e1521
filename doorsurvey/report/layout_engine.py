"""Paginated two-column layout for the door measurement report.

Each category becomes its own section that starts on a fresh page.  Rows
alternate strictly between the left and right column (entry ``i`` goes left
when ``i`` is even), each column keeps its own write cursor and draws its
table header the first time it receives a row on a page.  When the target
column has no room left, a continuation page is opened: both cursors and
both header states reset together, and both column headers are redrawn
before the row that triggered the break is placed.

The engine only produces a :class:`ReportDocument` of draw operations; the
renderer in ``pdf_builder`` turns that into PDF bytes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from ..domain_models import SECTION_ORDER, DoorCategory
from ..report_i18n import tr as _tr
from ..report_theme import REPORT_COLORS, RULE_WIDTH
from .pdf_layout import (
    FONT,
    FONT_B,
    FS_FOOTER,
    FS_META,
    FS_SECTION,
    FS_TABLE,
    FS_TITLE,
    ColumnCursor,
    ColumnPair,
    ReportGeometry,
    column_for_index,
)
from .report_data import (
    DrawLine,
    DrawText,
    GroupedMeasurements,
    ReportDocument,
    ReportEntry,
    ReportPage,
    RowPlacement,
)

LOGGER = logging.getLogger(__name__)

SECTION_TITLE_KEYS: dict[DoorCategory, str] = {
    DoorCategory.PRIMARY: "SECTION_PRIMARY",
    DoorCategory.SECONDARY: "SECTION_SECONDARY",
    DoorCategory.ENTRY: "SECTION_ENTRY",
}


class SectionState(Enum):
    NEW_PAGE = "new_page"
    HEADER_DRAWN = "header_drawn"
    FILLING_LEFT = "filling_left"
    FILLING_RIGHT = "filling_right"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class ReportContext:
    """Per-report values shown in every section header."""

    site_label: str
    group_labels: tuple[str, ...]
    use_accurate_values: bool
    generated_on: date
    lang: str = "en"

    @property
    def multi_group(self) -> bool:
        return len(self.group_labels) > 1

    def scope_text(self) -> str:
        if len(self.group_labels) == 1:
            return _tr(self.lang, "SCOPE_SINGLE", building=self.group_labels[0])
        return _tr(self.lang, "SCOPE_ALL", count=len(self.group_labels))

    def mode_text(self) -> str:
        mode_key = "MODE_ACCURATE" if self.use_accurate_values else "MODE_DEFAULT"
        return _tr(self.lang, "MODE_LABEL", mode=_tr(self.lang, mode_key))


def format_measurement(value: float) -> str:
    return f"{value:.1f}"


class SectionWriter:
    """Lays out one category section across as many pages as it needs."""

    def __init__(
        self,
        document: ReportDocument,
        context: ReportContext,
        geometry: ReportGeometry,
        category: DoorCategory,
    ) -> None:
        self.document = document
        self.context = context
        self.geometry = geometry
        self.category = category
        self.title = _tr(context.lang, SECTION_TITLE_KEYS[category])
        self.state = SectionState.NEW_PAGE
        self.page: ReportPage = document.new_page(geometry.page_width, geometry.page_height)
        self.columns = ColumnPair.at(geometry, geometry.content_top)
        self._draw_report_header()

    # -- primitives ------------------------------------------------------------

    def _text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        font: str = FONT,
        size: float = FS_TABLE,
        color: str = REPORT_COLORS["table_text"],
    ) -> None:
        self.page.ops.append(DrawText(x=x, y=y, text=text, font=font, size=size, color=color))

    def _rule(self, x1: float, x2: float, y: float) -> None:
        self.page.ops.append(
            DrawLine(x1=x1, y1=y, x2=x2, y2=y, width=RULE_WIDTH, color=REPORT_COLORS["rule"])
        )

    # -- page headers ----------------------------------------------------------

    def _draw_report_header(self) -> None:
        g = self.geometry
        ctx = self.context
        x = g.margin
        y = g.content_top
        self._text(
            x,
            y,
            _tr(ctx.lang, "REPORT_TITLE"),
            font=FONT_B,
            size=FS_TITLE,
            color=REPORT_COLORS["title"],
        )
        y -= g.title_advance
        meta_lines = (
            ctx.mode_text(),
            _tr(ctx.lang, "SITE_LABEL", site=ctx.site_label),
            ctx.scope_text(),
            _tr(ctx.lang, "GENERATED_LABEL", date=ctx.generated_on.isoformat()),
        )
        for idx, line in enumerate(meta_lines):
            self._text(x, y, line, size=FS_META, color=REPORT_COLORS["meta"])
            y -= g.meta_advance if idx < len(meta_lines) - 1 else g.meta_block_gap
        self._draw_section_title(self.title, y)
        self.columns.reset(g.first_table_top)
        self.state = SectionState.HEADER_DRAWN

    def _draw_section_title(self, text: str, y: float) -> None:
        self._text(
            self.geometry.margin,
            y,
            text,
            font=FONT_B,
            size=FS_SECTION,
            color=REPORT_COLORS["section_title"],
        )

    def _start_continuation_page(self) -> None:
        g = self.geometry
        self.page = self.document.new_page(g.page_width, g.page_height)
        self.state = SectionState.NEW_PAGE
        continued = _tr(self.context.lang, "SECTION_CONTINUED", title=self.title)
        self._draw_section_title(continued, g.content_top)
        self.columns.reset(g.continuation_table_top)
        self.state = SectionState.HEADER_DRAWN
        LOGGER.debug("%s continues on page %d", self.title, len(self.document.pages))

    # -- table -----------------------------------------------------------------

    def _draw_table_header(self, cursor: ColumnCursor) -> None:
        g = self.geometry
        lang = self.context.lang
        x = cursor.x
        if self.context.multi_group:
            building_dx, flat_dx, length_dx, breadth_dx = g.grouped_field_offsets
            self._text(x + building_dx, cursor.y, _tr(lang, "COLUMN_BUILDING"), font=FONT_B)
            self._text(x + flat_dx, cursor.y, _tr(lang, "COLUMN_FLAT"), font=FONT_B)
        else:
            flat_dx, length_dx, breadth_dx = g.flat_field_offsets
            self._text(x + flat_dx, cursor.y, _tr(lang, "COLUMN_FLAT_NO"), font=FONT_B)
        self._text(x + length_dx, cursor.y, _tr(lang, "COLUMN_LENGTH"), font=FONT_B)
        self._text(x + breadth_dx, cursor.y, _tr(lang, "COLUMN_BREADTH"), font=FONT_B)
        self._rule(x, x + g.column_width, cursor.y - g.header_rule_drop)
        cursor.advance(g.header_row_height)
        cursor.header_drawn = True

    def _draw_row(self, cursor: ColumnCursor, entry: ReportEntry) -> None:
        g = self.geometry
        x = cursor.x
        if self.context.multi_group:
            building_dx, flat_dx, length_dx, breadth_dx = g.grouped_field_offsets
            self._text(x + building_dx, cursor.y, entry.group_label or "")
            self._text(x + flat_dx, cursor.y, entry.flat_label)
        else:
            flat_dx, length_dx, breadth_dx = g.flat_field_offsets
            self._text(x + flat_dx, cursor.y, entry.flat_label)
        self._text(x + length_dx, cursor.y, format_measurement(entry.height_value))
        self._text(x + breadth_dx, cursor.y, format_measurement(entry.width_value))

    def place(self, index: int, entry: ReportEntry) -> None:
        column = column_for_index(index)
        cursor = self.columns.get(column)
        if not cursor.header_drawn:
            self._draw_table_header(cursor)
        if not cursor.has_room(self.geometry):
            self._start_continuation_page()
            self._draw_table_header(self.columns.left)
            self._draw_table_header(self.columns.right)
        self.state = SectionState.FILLING_LEFT if column == "left" else SectionState.FILLING_RIGHT
        self._draw_row(cursor, entry)
        self.page.rows.append(
            RowPlacement(
                category=self.category,
                index=index,
                column=column,
                y=cursor.y,
                entry=entry,
            )
        )
        cursor.advance(self.geometry.row_height)

    def draw_placeholder(self) -> None:
        self._text(
            self.geometry.margin,
            self.geometry.first_table_top,
            _tr(self.context.lang, "NO_MEASUREMENTS"),
            size=FS_META,
            color=REPORT_COLORS["placeholder"],
        )

    def finish(self, count: int, grand_total: int | None) -> None:
        g = self.geometry
        lang = self.context.lang
        footer_style = {"font": FONT_B, "size": FS_FOOTER, "color": REPORT_COLORS["footer"]}
        self._text(
            g.margin,
            g.footer_y,
            _tr(lang, "SECTION_COUNT", title=self.title, count=count),
            **footer_style,
        )
        if grand_total is not None:
            self._text(
                g.page_width - g.margin - g.total_label_width,
                g.footer_y,
                _tr(lang, "TOTAL_DOORS", count=grand_total),
                **footer_style,
            )
        self.state = SectionState.COMPLETE


def layout_report(
    grouped: GroupedMeasurements,
    context: ReportContext,
    geometry: ReportGeometry | None = None,
) -> ReportDocument:
    """Lay out all three sections, in fixed order, into a new document."""
    geometry = geometry or ReportGeometry()
    document = ReportDocument(
        title=_tr(context.lang, "REPORT_TITLE"),
        subject=f"{context.site_label} - {context.scope_text()}",
    )
    grand_total = grouped.grand_total
    for position, category in enumerate(SECTION_ORDER):
        entries = grouped.for_category(category)
        writer = SectionWriter(document, context, geometry, category)
        if not entries:
            writer.draw_placeholder()
        for index, entry in enumerate(entries):
            writer.place(index, entry)
        is_last = position == len(SECTION_ORDER) - 1
        writer.finish(len(entries), grand_total if is_last else None)
    LOGGER.debug(
        "Laid out %d door(s) across %d page(s) for site %s",
        grand_total,
        len(document.pages),
        context.site_label,
    )
    return document
