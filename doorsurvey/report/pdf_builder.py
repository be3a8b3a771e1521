"""PDF report builder – Canvas renderer for the door measurement report.

``build_report_pdf`` runs the whole pipeline for one request: optional
accurate-size correction, grouping and sorting, two-column layout, and
finally replaying the laid-out draw operations onto a ReportLab Canvas.
Nothing is cached between calls.
"""

from __future__ import annotations

import logging
from datetime import date
from io import BytesIO

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from .. import __version__
from ..domain_models import ReportGenerationError, ReportRequest
from ..normalizer import HEIGHT_OFFSET_DIGIT, WIDTH_OFFSET_DIGIT, apply_accurate_values
from .grouping import group_measurements
from .layout_engine import ReportContext, layout_report
from .pdf_layout import FONT, FONT_B, ReportGeometry
from .report_data import DrawLine, DrawText, ReportDocument

LOGGER = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
WINANSI_CODEC = "cp1252"


def _hex(c: str) -> colors.Color:
    return colors.HexColor(c)


def _resolve_fonts(document: ReportDocument) -> None:
    """Load every font the document uses and check its text can be encoded.

    The standard Type 1 fonts only cover WinAnsi; anything outside it would
    be drawn as blank boxes, so such text fails the whole report instead.
    """
    texts = [op for page in document.pages for op in page.ops if isinstance(op, DrawText)]
    names = sorted({FONT, FONT_B, *(op.font for op in texts)})
    fonts = {name: pdfmetrics.getFont(name) for name in names}
    for op in texts:
        if isinstance(fonts[op.font], TTFont):
            continue
        try:
            op.text.encode(WINANSI_CODEC)
        except UnicodeEncodeError as exc:
            raise ValueError(
                f"{op.font} cannot encode {op.text[exc.start : exc.end]!r} in {op.text!r}"
            ) from exc


def render_document(document: ReportDocument) -> bytes:
    """Replay *document* onto a Canvas and return the PDF bytes."""
    _resolve_fonts(document)
    buf = BytesIO()
    first = document.pages[0]
    c = Canvas(buf, pagesize=(first.width, first.height), pageCompression=0)
    c.setTitle(document.title)
    c.setSubject(document.subject)
    c.setAuthor(f"doorsurvey {__version__}")
    for page in document.pages:
        c.setPageSize((page.width, page.height))
        for op in page.ops:
            if isinstance(op, DrawText):
                c.setFillColor(_hex(op.color))
                c.setFont(op.font, op.size)
                c.drawString(op.x, op.y, op.text)
            elif isinstance(op, DrawLine):
                c.setStrokeColor(_hex(op.color))
                c.setLineWidth(op.width)
                c.line(op.x1, op.y1, op.x2, op.y2)
        c.showPage()
    c.save()
    return buf.getvalue()


def compose_report(
    request: ReportRequest,
    geometry: ReportGeometry | None = None,
    *,
    height_offset: int = HEIGHT_OFFSET_DIGIT,
    width_offset: int = WIDTH_OFFSET_DIGIT,
) -> ReportDocument:
    records = apply_accurate_values(
        request.records,
        request.use_accurate_values,
        height_offset=height_offset,
        width_offset=width_offset,
    )
    grouped = group_measurements(records, multi_group=request.multi_group)
    context = ReportContext(
        site_label=request.site_label,
        group_labels=request.group_labels,
        use_accurate_values=request.use_accurate_values,
        generated_on=request.generated_on or date.today(),
        lang=request.lang,
    )
    return layout_report(grouped, context, geometry)


def build_report_pdf(
    request: ReportRequest,
    geometry: ReportGeometry | None = None,
    *,
    height_offset: int = HEIGHT_OFFSET_DIGIT,
    width_offset: int = WIDTH_OFFSET_DIGIT,
) -> bytes:
    """Build the door measurement PDF for *request*."""
    try:
        document = compose_report(
            request,
            geometry,
            height_offset=height_offset,
            width_offset=width_offset,
        )
        return render_document(document)
    except Exception as exc:
        LOGGER.error("PDF generation failed.", exc_info=True)
        raise ReportGenerationError("PDF generation failed") from exc


def report_filename(request: ReportRequest) -> str:
    if len(request.group_labels) == 1:
        return f"door-measurements-{request.site_label}-{request.group_labels[0]}.pdf"
    return f"door-measurements-{request.site_label}-all-buildings.pdf"
