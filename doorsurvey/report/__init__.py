"""doorsurvey.report – grouping, layout and PDF rendering for the door report."""

from .grouping import group_measurements
from .layout_engine import ReportContext, layout_report
from .pdf_builder import build_report_pdf, compose_report, report_filename
from .pdf_layout import ReportGeometry

__all__ = [
    "ReportContext",
    "ReportGeometry",
    "build_report_pdf",
    "compose_report",
    "group_measurements",
    "layout_report",
    "report_filename",
]
