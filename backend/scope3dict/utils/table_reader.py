"""Read an uploaded workbook or CSV into raw rows (header row included)."""

from __future__ import annotations

import csv
import io
import logging
import zipfile
from pathlib import PurePath
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from scope3dict.errors import TableParseError
from scope3dict.utils.text_processor import decode_text

logger = logging.getLogger(__name__)

WORKBOOK_EXTENSIONS = {".xlsx", ".xlsm"}
CSV_EXTENSIONS = {".csv"}
SUPPORTED_EXTENSIONS = WORKBOOK_EXTENSIONS | CSV_EXTENSIONS


def file_extension(filename: str) -> str:
    return PurePath(filename).suffix.lower()


def read_table(filename: str, content: bytes) -> list[list[Any]]:
    """Return every row of the first sheet (or the CSV) as a list of cells.

    Raises TableParseError for unsupported or unreadable files.
    """
    suffix = file_extension(filename)
    if suffix in WORKBOOK_EXTENSIONS:
        rows = _read_workbook(content)
    elif suffix in CSV_EXTENSIONS:
        rows = _read_csv(content)
    else:
        raise TableParseError(
            f"未対応のファイル形式です: '{suffix or filename}'（対応形式: .xlsx, .xlsm, .csv）"
        )
    logger.debug("Read %d rows from %s", len(rows), filename)
    return rows


def _read_workbook(content: bytes) -> list[list[Any]]:
    try:
        wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
        raise TableParseError("Excelファイルを読み込めませんでした。") from exc

    try:
        if not wb.worksheets:
            raise TableParseError("Excelファイルにシートがありません。")
        sheet = wb.worksheets[0]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        wb.close()


def _read_csv(content: bytes) -> list[list[Any]]:
    text = decode_text(content)
    try:
        return [row for row in csv.reader(io.StringIO(text, newline=""))]
    except csv.Error as exc:
        raise TableParseError("CSVファイルを解析できませんでした。") from exc
