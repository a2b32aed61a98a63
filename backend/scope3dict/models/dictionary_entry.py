"""Dictionary entry model shared by learning, manual entry and matching."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

EntrySource = Literal["manual", "learned"]
Keyword = Annotated[str, StringConstraints(min_length=2, max_length=12)]


def new_entry_id() -> str:
    return uuid.uuid4().hex


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class AmountRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float = Field(gt=0)
    max: float = Field(gt=0)

    @model_validator(mode="after")
    def _ordered(self) -> AmountRange:
        if self.min > self.max:
            raise ValueError("amount range min must not exceed max")
        return self

    def contains(self, amount: float) -> bool:
        return self.min <= amount <= self.max


class DictionaryEntry(BaseModel):
    """A keyword rule mapping line items to one taxonomy category.

    Entries never change after creation; the store only ever appends them.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_entry_id)
    keywords: list[Keyword] = Field(min_length=1, max_length=8)
    category: str
    category_code: str = ""  # 6 digits, or "" when the label had none
    confidence: float = Field(ge=0.0, le=1.0)
    source: EntrySource
    frequency: int = Field(default=1, ge=1)
    amount_range: AmountRange | None = None
    supplier_hints: list[str] = Field(default_factory=list, max_length=4)
    created_at: str = Field(default_factory=_now_iso)
