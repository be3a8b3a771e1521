from __future__ import annotations

import pytest

from doorsurvey.domain_models import DoorCategory
from doorsurvey.report.grouping import group_measurements
from doorsurvey.report.layout_engine import (
    ReportContext,
    SectionState,
    SectionWriter,
    format_measurement,
    layout_report,
)
from doorsurvey.report.pdf_builder import compose_report
from doorsurvey.report.pdf_layout import ReportGeometry
from doorsurvey.report.report_data import DrawLine, DrawText, ReportDocument

from builders import FIXED_DATE, make_request, numbered_records, record


def _context(groups: tuple[str, ...] = ("Tower A",), accurate: bool = False) -> ReportContext:
    return ReportContext(
        site_label="Lakeview",
        group_labels=groups,
        use_accurate_values=accurate,
        generated_on=FIXED_DATE,
    )


def _layout(records, groups=("Tower A",), geometry=None) -> ReportDocument:
    grouped = group_measurements(records, multi_group=len(groups) > 1)
    return layout_report(grouped, _context(groups), geometry)


def _section_pages(document: ReportDocument, category: DoorCategory):
    return [p for p in document.pages if any(r.category is category for r in p.rows)]


def _all_rows(document: ReportDocument):
    return [row for page in document.pages for row in page.rows]


# -- section structure -------------------------------------------------------


def test_every_section_starts_on_its_own_page() -> None:
    doc = _layout([record("A-1"), record("A-1", category="BATHROOM")])
    assert len(doc.pages) == 3
    titles = [
        next(t for t in page.texts() if t.endswith("Doors")) for page in doc.pages
    ]
    assert titles == ["Bedroom Doors", "Bathroom Doors", "Main Entry Doors"]


def test_section_header_block() -> None:
    doc = _layout([record("A-1")])
    texts = doc.pages[0].texts()
    assert texts[:6] == [
        "Door Measurement Report",
        "Mode: Default",
        "Site: Lakeview",
        "Building: Tower A",
        f"Generated: {FIXED_DATE.isoformat()}",
        "Bedroom Doors",
    ]


def test_multi_group_scope_and_columns() -> None:
    doc = _layout(
        [record("101", group="Tower B"), record("101", group="Tower A")],
        groups=("Tower A", "Tower B", "Tower C"),
    )
    texts = doc.pages[0].texts()
    assert "Buildings: All (3)" in texts
    assert texts.count("Building") == 2
    assert texts.count("Flat") == 2
    assert "Flat No" not in texts
    g = ReportGeometry()
    group_cells = [
        op
        for op in doc.pages[0].ops
        if isinstance(op, DrawText) and op.text in {"Tower A", "Tower B"}
    ]
    assert [(op.text, op.x) for op in group_cells] == [
        ("Tower A", g.column_x("left")),
        ("Tower B", g.column_x("right")),
    ]


def test_example_three_records_alternate_columns() -> None:
    doc = _layout(
        [
            record("A-101", 30.0, 24.0),
            record("A-102", 31.5, 25.2),
            record("A-100", 29.0, 23.0),
        ]
    )
    rows = doc.pages[0].rows
    assert [r.entry.flat_label for r in rows] == ["A-100", "A-101", "A-102"]
    assert [r.column for r in rows] == ["left", "right", "left"]
    left = [r.entry.flat_label for r in rows if r.column == "left"]
    right = [r.entry.flat_label for r in rows if r.column == "right"]
    assert left == ["A-100", "A-102"]
    assert right == ["A-101"]
    texts = doc.pages[0].texts()
    assert "31.5" in texts and "25.2" in texts
    assert "Bedroom Doors Count: 3" in texts


def test_rows_on_both_columns_share_baselines() -> None:
    doc = _layout(numbered_records(4))
    rows = doc.pages[0].rows
    assert rows[0].y == rows[1].y
    assert rows[2].y == rows[3].y
    assert rows[0].y - rows[2].y == ReportGeometry().row_height


# -- headers -----------------------------------------------------------------


def test_column_header_drawn_lazily_on_first_row() -> None:
    one = _layout([record("A-1")])
    assert one.pages[0].texts().count("Flat No") == 1
    two = _layout([record("A-1"), record("A-2")])
    assert two.pages[0].texts().count("Flat No") == 2
    rules = [op for op in two.pages[0].ops if isinstance(op, DrawLine)]
    assert len(rules) == 2


def test_empty_section_draws_placeholder_instead_of_table() -> None:
    doc = _layout([record("A-1")])
    bathroom_page = doc.pages[1]
    texts = bathroom_page.texts()
    assert "No measurements recorded" in texts
    assert "Flat No" not in texts
    assert bathroom_page.rows == []
    assert "Bathroom Doors Count: 0" in texts


# -- pagination --------------------------------------------------------------


@pytest.mark.parametrize("extra", [0, 1])
def test_first_page_capacity_boundary(extra: int) -> None:
    g = ReportGeometry()
    count = g.entries_per_page(first_page=True) + extra
    doc = _layout(numbered_records(count))
    assert len(_section_pages(doc, DoorCategory.PRIMARY)) == 1 + extra


def test_page_count_follows_geometry() -> None:
    g = ReportGeometry()
    later = g.entries_per_page(first_page=False)
    count = g.entries_per_page(first_page=True) + 2 * later + 1
    doc = _layout(numbered_records(count))
    pages = _section_pages(doc, DoorCategory.PRIMARY)
    assert len(pages) == g.section_page_count(count) == 4
    # two empty sections follow, one page each
    assert len(doc.pages) == 4 + 2


def test_page_count_with_custom_geometry() -> None:
    g = ReportGeometry(page_height=500, row_height=20)
    count = 2 * g.entries_per_page(first_page=False) + 1
    doc = _layout(numbered_records(count), geometry=g)
    assert len(_section_pages(doc, DoorCategory.PRIMARY)) == g.section_page_count(count)


def test_alternation_continues_across_pages() -> None:
    g = ReportGeometry()
    count = g.entries_per_page(first_page=True) + 7
    doc = _layout(numbered_records(count))
    rows = _all_rows(doc)
    assert [r.index for r in rows] == list(range(count))
    assert all(r.column == ("left" if r.index % 2 == 0 else "right") for r in rows)
    assert [r.entry.flat_label for r in rows] == sorted(r.entry.flat_label for r in rows)
    second = _section_pages(doc, DoorCategory.PRIMARY)[1]
    assert second.rows[0].index == g.entries_per_page(first_page=True)
    assert second.rows[0].column == "left"


def test_rows_never_start_below_break_floor() -> None:
    g = ReportGeometry()
    doc = _layout(numbered_records(300))
    assert all(r.y >= g.break_floor for r in _all_rows(doc))


def test_continuation_page_redraws_headers() -> None:
    g = ReportGeometry()
    doc = _layout(numbered_records(g.entries_per_page(first_page=True) + 2))
    page = _section_pages(doc, DoorCategory.PRIMARY)[1]
    texts = page.texts()
    assert texts[0] == "Bedroom Doors (continued)"
    assert "Door Measurement Report" not in texts
    assert texts.count("Flat No") == 2
    assert page.rows[0].y == g.continuation_table_top - g.header_row_height


def test_break_on_last_entry_still_draws_both_headers() -> None:
    g = ReportGeometry()
    doc = _layout(numbered_records(g.entries_per_page(first_page=True) + 1))
    page = _section_pages(doc, DoorCategory.PRIMARY)[1]
    assert [r.column for r in page.rows] == ["left"]
    assert page.texts().count("Flat No") == 2
    rules = [op for op in page.ops if isinstance(op, DrawLine)]
    assert {op.x1 for op in rules} == {g.column_x("left"), g.column_x("right")}


def test_section_writer_reaches_complete_state() -> None:
    document = ReportDocument(title="t")
    writer = SectionWriter(document, _context(), ReportGeometry(), DoorCategory.ENTRY)
    assert writer.state is SectionState.HEADER_DRAWN
    writer.place(0, group_measurements([record("A-1")], multi_group=False).primary[0])
    assert writer.state is SectionState.FILLING_LEFT
    writer.finish(1, None)
    assert writer.state is SectionState.COMPLETE


# -- footers -----------------------------------------------------------------


def test_grand_total_drawn_once_on_last_section() -> None:
    doc = _layout(
        numbered_records(3)
        + numbered_records(2, DoorCategory.SECONDARY)
        + numbered_records(1, DoorCategory.ENTRY)
        + [record("X-1", category="GARAGE")]
    )
    totals = [
        (i, t) for i, page in enumerate(doc.pages) for t in page.texts() if t.startswith("Total")
    ]
    assert totals == [(len(doc.pages) - 1, "Total Doors: 6")]
    assert "Bedroom Doors Count: 3" in doc.pages[0].texts()
    assert "Bathroom Doors Count: 2" in doc.pages[1].texts()
    assert "Main Entry Doors Count: 1" in doc.pages[2].texts()


def test_section_count_footer_on_last_page_of_section() -> None:
    g = ReportGeometry()
    doc = _layout(numbered_records(g.entries_per_page(first_page=True) + 1))
    pages = _section_pages(doc, DoorCategory.PRIMARY)
    footer = f"Bedroom Doors Count: {g.entries_per_page(first_page=True) + 1}"
    assert footer not in pages[0].texts()
    assert footer in pages[1].texts()


# -- values ------------------------------------------------------------------


@pytest.mark.parametrize(("value", "text"), [(30, "30.0"), (31.55, "31.6"), (0.04, "0.0")])
def test_format_measurement(value: float, text: str) -> None:
    assert format_measurement(value) == text


def test_accurate_mode_applies_correction_and_label() -> None:
    doc = compose_report(make_request([record("A-1", 72.2, 72.9)], accurate=True))
    texts = doc.pages[0].texts()
    assert "Mode: Accurate" in texts
    assert "71.6" in texts
    assert "72.7" in texts
    assert "72.2" not in texts


def test_default_mode_passes_values_through() -> None:
    doc = compose_report(make_request([record("A-1", 72.2, 72.9)]))
    texts = doc.pages[0].texts()
    assert "Mode: Default" in texts
    assert "72.2" in texts and "72.9" in texts


def test_dutch_labels() -> None:
    doc = compose_report(make_request([record("A-1")], lang="nl"))
    texts = doc.pages[0].texts()
    assert "Rapport deurmaten" in texts
    assert "Slaapkamerdeuren" in texts
