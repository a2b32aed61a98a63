"""Pydantic request/response schemas for matching endpoints."""

from pydantic import BaseModel

from scope3dict.api.schemas.dictionary import RowWarningItem
from scope3dict.models.match_result import MatchResult


class QueryRequest(BaseModel):
    item_name: str
    supplier_name: str = ""
    amount: float = 0.0


class ClassifyResponse(BaseModel):
    results: list[MatchResult]
    warnings: list[RowWarningItem]
    total: int
    matched: int
    match_rate: float  # percent
