"""Pydantic request/response schemas for dictionary endpoints."""

from pydantic import BaseModel

from scope3dict.models.dictionary_entry import DictionaryEntry


class DictionaryStatsResponse(BaseModel):
    total_entries: int
    learned_entries: int
    manual_entries: int


class DictionaryResponse(BaseModel):
    data: list[DictionaryEntry]
    stats: DictionaryStatsResponse


class ManualEntryRequest(BaseModel):
    keywords: str  # comma separated, "," or "、"
    category: str
    category_code: str


class RowWarningItem(BaseModel):
    row_number: int
    reason: str


class LearnResponse(BaseModel):
    total_rows: int
    valid_rows: int
    eligible_rows: int
    category_groups: int
    created_entries: int
    entries: list[DictionaryEntry]
    warnings: list[RowWarningItem]
    stats: DictionaryStatsResponse
