"""Dictionary endpoints: list, manual entry, learning from an upload."""

from collections.abc import Sequence
from dataclasses import asdict

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from scope3dict.api.deps import get_service, read_upload, to_http_error
from scope3dict.api.schemas.dictionary import (
    DictionaryResponse,
    DictionaryStatsResponse,
    LearnResponse,
    ManualEntryRequest,
    RowWarningItem,
)
from scope3dict.db.dictionary_store import DictionaryStats
from scope3dict.errors import DictionaryError
from scope3dict.models.dictionary_entry import DictionaryEntry
from scope3dict.services.classification_service import ClassificationService

router = APIRouter(prefix="/api/dictionary", tags=["dictionary"])


def _stats(entries: Sequence[DictionaryEntry]) -> DictionaryStatsResponse:
    return DictionaryStatsResponse(**asdict(DictionaryStats.of(entries)))


@router.get("", response_model=DictionaryResponse)
async def list_entries(service: ClassificationService = Depends(get_service)):
    """Return every dictionary entry in insertion order."""
    entries = service.store.snapshot()
    return DictionaryResponse(data=list(entries), stats=_stats(entries))


@router.get("/{entry_id}", response_model=DictionaryEntry)
async def get_entry(entry_id: str, service: ClassificationService = Depends(get_service)):
    entry = service.store.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="辞書エントリが見つかりません")
    return entry


@router.post("/entries", response_model=DictionaryEntry, status_code=201)
async def add_manual_entry(
    req: ManualEntryRequest,
    service: ClassificationService = Depends(get_service),
):
    """Add an operator-defined entry (confidence 0.90)."""
    try:
        return service.add_manual_entry(req.keywords, req.category, req.category_code)
    except DictionaryError as e:
        raise to_http_error(e)


@router.post("/learn", response_model=LearnResponse)
async def learn_from_file(
    file: UploadFile | None = File(None),
    service: ClassificationService = Depends(get_service),
):
    """Learn entries from a labelled .xlsx/.csv file and append them."""
    filename, content = await read_upload(file)
    try:
        report = await service.learn_from_upload(filename, content)
    except DictionaryError as e:
        raise to_http_error(e)

    return LearnResponse(
        total_rows=report.total_rows,
        valid_rows=report.valid_rows,
        eligible_rows=report.eligible_rows,
        category_groups=report.category_groups,
        created_entries=len(report.entries),
        entries=report.entries,
        warnings=[RowWarningItem(row_number=w.row_number, reason=w.reason) for w in report.warnings],
        stats=_stats(service.store.snapshot()),
    )
