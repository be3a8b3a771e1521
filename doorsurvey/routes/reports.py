"""Door measurement PDF report endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..api_models import ReportPdfRequest
from ..domain_models import ReportGenerationError, ReportRequestError
from ..report.pdf_builder import PDF_MEDIA_TYPE, build_report_pdf, report_filename
from ._helpers import safe_filename

if TYPE_CHECKING:
    from ..app import RuntimeState

LOGGER = logging.getLogger(__name__)


def create_report_routes(state: RuntimeState) -> APIRouter:
    router = APIRouter()
    report_cfg = state.config.report

    @router.post("/api/reports/door-measurements.pdf")
    async def download_door_measurement_pdf(payload: ReportPdfRequest) -> Response:
        try:
            request = payload.to_domain(default_lang=report_cfg.lang)
        except ReportRequestError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        try:
            pdf = await asyncio.to_thread(
                build_report_pdf,
                request,
                report_cfg.geometry,
                height_offset=report_cfg.height_offset_digit,
                width_offset=report_cfg.width_offset_digit,
            )
        except ReportGenerationError as exc:
            LOGGER.exception("Error generating PDF for site %s", request.site_label)
            raise HTTPException(status_code=500, detail="Failed to generate PDF") from exc

        pdf_name = safe_filename(report_filename(request))
        return Response(
            content=pdf,
            media_type=PDF_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{pdf_name}"'},
        )

    return router
