"""Match verdict models. Derived per query, never stored."""

from __future__ import annotations

from pydantic import BaseModel, Field

from scope3dict.models.dictionary_entry import DictionaryEntry

UNCLASSIFIED = "未分類"


class ScoreBreakdown(BaseModel):
    keyword: float = 0.0
    supplier: float = 0.0
    amount: float = 0.0
    confidence: float = 0.0

    @property
    def total(self) -> float:
        return self.keyword + self.supplier + self.amount + self.confidence


class MatchResult(BaseModel):
    item_name: str
    supplier_name: str
    amount: float
    matched_entry: DictionaryEntry | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=0.95)
    predicted_category: str = UNCLASSIFIED
    row_number: int | None = None
    score: ScoreBreakdown | None = None

    @property
    def matched(self) -> bool:
        return self.matched_entry is not None
