"""FastAPI routes for the impact assessment register."""

from __future__ import annotations

from io import BytesIO
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse

from esms.modules._infra.crud import add_crud_routes

from . import pdf_export, services

router = APIRouter(prefix="/api/impact-assessments", tags=["impact-assessments"])


def _filters(request: Request) -> dict:
    return {
        name: value
        for name, value in request.query_params.items()
        if name in services.IMPACT_ASSESSMENTS.filter_fields and value != ""
    }


@router.get("/summary")
def summary(request: Request) -> dict:
    return services.significance_summary(filters=_filters(request))


@router.get("/export")
def export_pdf(request: Request, q: Optional[str] = Query(default=None)) -> StreamingResponse:
    assessments = services.list_assessments(q=q, filters=_filters(request))
    pdf_bytes = pdf_export.build_pdf(assessments=assessments)
    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": "inline; filename=impact_assessments.pdf"},
    )


add_crud_routes(router, services.IMPACT_ASSESSMENTS)
