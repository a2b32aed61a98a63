"""Shared test fixtures for backend tests."""

import csv
import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from scope3dict.api.main import create_app
from scope3dict.db.dictionary_store import DictionaryStore
from scope3dict.services.classification_service import ClassificationService

LABEL_PREFIX = "環境省DB 5産連表"
INTERNET_LABEL = f"{LABEL_PREFIX} 734101 Internet-related services"

TRAINING_HEADER = ["品目名", "仕入先名", "金額", "排出原単位"]
QUERY_HEADER = ["品目名", "仕入先名", "金額"]

# The AWS scenario: two labelled rows → one learned entry
AWS_TRAINING_ROWS = [
    TRAINING_HEADER,
    ["AWS usage fee", "Amazon Web Services Japan", 180000, INTERNET_LABEL],
    ["AWS usage fee monthly", "AmazonWebServices", 95000, INTERNET_LABEL],
]

AWS_QUERY_ROWS = [
    QUERY_HEADER,
    ["AWS monthly invoice", "Amazon Web Services", 120000],
]


def _xlsx(rows: list[list], extra_sheets: dict[str, list[list]] | None = None) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "data"
    for row in rows:
        ws.append(row)
    for title, sheet_rows in (extra_sheets or {}).items():
        extra = wb.create_sheet(title)
        for row in sheet_rows:
            extra.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _csv(rows: list[list], encoding: str = "utf-8-sig") -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf)
    for row in rows:
        writer.writerow(row)
    return buf.getvalue().encode(encoding)


@pytest.fixture
def make_xlsx():
    """Factory: list of rows → .xlsx bytes (first sheet)."""
    return _xlsx


@pytest.fixture
def make_csv():
    """Factory: list of rows → CSV bytes in the given encoding."""
    return _csv


@pytest.fixture
def internet_label():
    return INTERNET_LABEL


@pytest.fixture
def aws_training_rows():
    return [list(r) for r in AWS_TRAINING_ROWS]


@pytest.fixture
def aws_query_rows():
    return [list(r) for r in AWS_QUERY_ROWS]


@pytest.fixture
def store():
    return DictionaryStore()


@pytest.fixture
def service(store):
    return ClassificationService(store)


@pytest.fixture
def client():
    """TestClient with the lifespan run, so app.state holds a fresh store."""
    with TestClient(create_app()) as c:
        yield c
