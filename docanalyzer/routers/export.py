"""
Export Router - Downloads analysis results as JSON or CSV.

Example Usage:
    POST /export/json?sentiment=positive&sort_by=confidence
    POST /export/csv
"""
from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import Response
from typing import List, Optional

from .dependencies import get_export_service
from ..api.dto import DocumentAnalysisDTO
from ..api.mappers import DocumentAnalysisMapper
from ..core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()

SORT_PATTERN = "^(name|confidence|wordCount|date)$"


def _download(content: str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


def _prepare(results: List[DocumentAnalysisDTO], sentiment: Optional[str], sort_by: Optional[str]):
    export_service = get_export_service()
    try:
        prepared = export_service.prepare(
            DocumentAnalysisMapper.to_entity_list(results), sentiment=sentiment, sort_by=sort_by
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.info(f"Exporting {len(prepared)} of {len(results)} result(s)")
    return export_service, prepared


@router.post("/export/json")
async def export_json(
    results: List[DocumentAnalysisDTO],
    sentiment: Optional[str] = Query(None, description="Case-insensitive sentiment filter, 'all' for none"),
    sort_by: Optional[str] = Query(None, pattern=SORT_PATTERN)
):
    """Download results as pretty-printed JSON (document-analysis-YYYY-MM-DD.json)."""
    export_service, prepared = _prepare(results, sentiment, sort_by)
    return _download(
        export_service.to_json(prepared),
        "application/json",
        export_service.download_name("json")
    )


@router.post("/export/csv")
async def export_csv(
    results: List[DocumentAnalysisDTO],
    sentiment: Optional[str] = Query(None, description="Case-insensitive sentiment filter, 'all' for none"),
    sort_by: Optional[str] = Query(None, pattern=SORT_PATTERN)
):
    """Download results as CSV (document-analysis-YYYY-MM-DD.csv), every cell quoted."""
    export_service, prepared = _prepare(results, sentiment, sort_by)
    return _download(
        export_service.to_csv(prepared),
        "text/csv; charset=utf-8",
        export_service.download_name("csv")
    )
