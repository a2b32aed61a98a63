"""Matching endpoints: classify an uploaded table or a single line item."""

from fastapi import APIRouter, Depends, File, UploadFile

from scope3dict.api.deps import get_service, read_upload, to_http_error
from scope3dict.api.schemas.dictionary import RowWarningItem
from scope3dict.api.schemas.matching import ClassifyResponse, QueryRequest
from scope3dict.errors import DictionaryError
from scope3dict.models.match_result import MatchResult
from scope3dict.models.rows import QueryRow
from scope3dict.services.classification_service import ClassificationService

router = APIRouter(prefix="/api/matching", tags=["matching"])


@router.post("/classify", response_model=ClassifyResponse)
async def classify_file(
    file: UploadFile | None = File(None),
    service: ClassificationService = Depends(get_service),
):
    """Classify every row of an item/supplier/amount table."""
    filename, content = await read_upload(file)
    try:
        report = await service.classify_upload(filename, content)
    except DictionaryError as e:
        raise to_http_error(e)

    return ClassifyResponse(
        results=report.results,
        warnings=[RowWarningItem(row_number=w.row_number, reason=w.reason) for w in report.warnings],
        total=report.total,
        matched=report.matched,
        match_rate=report.match_rate,
    )


@router.post("/query", response_model=MatchResult)
async def classify_one(
    req: QueryRequest,
    service: ClassificationService = Depends(get_service),
):
    try:
        return service.classify_one(
            QueryRow(item_name=req.item_name, supplier_name=req.supplier_name, amount=req.amount)
        )
    except DictionaryError as e:
        raise to_http_error(e)
