"""Typed rows handed to the engines once a table has been parsed."""

from __future__ import annotations

from pydantic import BaseModel


class QueryRow(BaseModel):
    item_name: str
    supplier_name: str = ""
    amount: float = 0.0
    row_number: int | None = None  # 1-based sheet row, header is row 1


class TrainingRow(QueryRow):
    category_label: str | None = None
