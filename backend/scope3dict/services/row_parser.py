"""Turn raw table rows into typed TrainingRow / QueryRow records.

Columns are positional; row 0 is a header and skipped:

    training: item name | supplier | amount | category label
    query:    item name | supplier | amount

Problem rows are skipped with a RowWarning instead of failing the batch.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from scope3dict.models.rows import QueryRow, TrainingRow
from scope3dict.utils.text_normalizer import to_half_width

TRAINING_MIN_COLUMNS = 4
QUERY_MIN_COLUMNS = 3

_AMOUNT_NOISE = str.maketrans("", "", ",¥￥円 　")

RowT = TypeVar("RowT", QueryRow, TrainingRow)


@dataclass
class RowWarning:
    row_number: int
    reason: str


@dataclass
class ParsedRows(Generic[RowT]):
    rows: list[RowT] = field(default_factory=list)
    warnings: list[RowWarning] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.rows) + len(self.warnings)


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def parse_amount(value: Any) -> float:
    """Parse an amount cell. Blank is 0; anything non-numeric raises ValueError."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"not an amount: {value!r}")
    if isinstance(value, (int, float)):
        amount = float(value)
    else:
        text = to_half_width(str(value)).translate(_AMOUNT_NOISE)
        if not text:
            return 0.0
        amount = float(text)
    if not math.isfinite(amount):
        raise ValueError(f"not a finite amount: {value!r}")
    return amount


def _is_blank(row: list[Any]) -> bool:
    return all(cell_text(c) == "" for c in row)


def _common_fields(
    row: list[Any], row_number: int, min_columns: int
) -> tuple[str, str, float] | RowWarning:
    if len(row) < min_columns:
        return RowWarning(row_number, "列数が不足しています")

    item_name, supplier_name = cell_text(row[0]), cell_text(row[1])
    if not item_name or not supplier_name:
        return RowWarning(row_number, "品目名または仕入先名が空です")

    try:
        amount = parse_amount(row[2])
    except ValueError:
        return RowWarning(row_number, f"金額が数値ではありません: {cell_text(row[2])}")
    return item_name, supplier_name, amount


def parse_training_rows(table: list[list[Any]]) -> ParsedRows[TrainingRow]:
    parsed: ParsedRows[TrainingRow] = ParsedRows()
    for row_number, row in enumerate(table[1:], start=2):
        if not row or _is_blank(row):
            continue
        fields = _common_fields(row, row_number, TRAINING_MIN_COLUMNS)
        if isinstance(fields, RowWarning):
            parsed.warnings.append(fields)
            continue

        item_name, supplier_name, amount = fields
        parsed.rows.append(TrainingRow(
            item_name=item_name,
            supplier_name=supplier_name,
            amount=amount,
            category_label=cell_text(row[3]) or None,
            row_number=row_number,
        ))
    return parsed


def parse_query_rows(table: list[list[Any]]) -> ParsedRows[QueryRow]:
    parsed: ParsedRows[QueryRow] = ParsedRows()
    for row_number, row in enumerate(table[1:], start=2):
        if not row or _is_blank(row):
            continue
        fields = _common_fields(row, row_number, QUERY_MIN_COLUMNS)
        if isinstance(fields, RowWarning):
            parsed.warnings.append(fields)
            continue

        item_name, supplier_name, amount = fields
        parsed.rows.append(QueryRow(
            item_name=item_name,
            supplier_name=supplier_name,
            amount=amount,
            row_number=row_number,
        ))
    return parsed
