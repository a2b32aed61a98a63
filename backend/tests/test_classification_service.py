"""Tests for ClassificationService: upload → parse → engine → store."""

from unittest.mock import patch

import pytest

from scope3dict.errors import InputValidationError, NoUsableDataError, TableParseError
from scope3dict.models.match_result import UNCLASSIFIED
from scope3dict.models.rows import QueryRow

TRAINING_HEADER = ["品目名", "仕入先名", "金額", "排出原単位"]
QUERY_HEADER = ["品目名", "仕入先名", "金額"]


# ------------------------------------------------------------------
# Learning
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_learn_from_xlsx(service, store, make_xlsx, aws_training_rows):
    report = await service.learn_from_upload("train.xlsx", make_xlsx(aws_training_rows))

    assert report.total_rows == 2
    assert report.valid_rows == 2
    assert report.eligible_rows == 2
    assert report.category_groups == 1
    assert len(report.entries) == 1
    assert report.warnings == []

    assert len(store) == 1
    entry = store.snapshot()[0]
    assert entry.category == "Internet-related services"
    assert entry.category_code == "734101"


@pytest.mark.asyncio
async def test_learn_from_csv(service, store, make_csv, aws_training_rows):
    report = await service.learn_from_upload("train.csv", make_csv(aws_training_rows, encoding="cp932"))
    assert len(report.entries) == 1
    assert len(store) == 1


@pytest.mark.asyncio
async def test_learning_report_counts_skipped_rows(service, make_xlsx, internet_label):
    rows = [
        TRAINING_HEADER,
        ["サーバー保守", "ABC", 1000, internet_label],
        ["サーバー保守", "ABC", 2000, internet_label],
        ["サーバー保守", "ABC", 2000, "IDEA 734101 other database"],
        ["サーバー保守", "", 2000, internet_label],
    ]
    report = await service.learn_from_upload("train.xlsx", make_xlsx(rows))

    assert report.total_rows == 4
    assert report.valid_rows == 3
    assert report.eligible_rows == 2
    assert [w.row_number for w in report.warnings] == [5]


@pytest.mark.asyncio
async def test_learn_without_eligible_rows_leaves_store_untouched(service, store, make_xlsx):
    rows = [TRAINING_HEADER, ["サーバー保守", "ABC", 1000, "IDEA 123456 X"]]
    with pytest.raises(NoUsableDataError):
        await service.learn_from_upload("train.xlsx", make_xlsx(rows))
    assert len(store) == 0


@pytest.mark.asyncio
async def test_learn_failure_midway_commits_nothing(service, store, make_xlsx, aws_training_rows):
    with patch.object(service.learning_engine, "build_entry", side_effect=RuntimeError("boom")):
        with pytest.raises(RuntimeError):
            await service.learn_from_upload("train.xlsx", make_xlsx(aws_training_rows))
    assert len(store) == 0


@pytest.mark.asyncio
async def test_learn_unreadable_file(service, store):
    with pytest.raises(TableParseError):
        await service.learn_from_upload("train.xlsx", b"garbage")
    assert len(store) == 0


@pytest.mark.asyncio
async def test_second_pass_appends(service, store, make_xlsx, aws_training_rows):
    content = make_xlsx(aws_training_rows)
    await service.learn_from_upload("train.xlsx", content)
    await service.learn_from_upload("train.xlsx", content)
    entries = store.snapshot()
    assert len(entries) == 2
    assert entries[0].id != entries[1].id


# ------------------------------------------------------------------
# Matching
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_learn_then_classify(service, make_xlsx, aws_training_rows, aws_query_rows):
    await service.learn_from_upload("train.xlsx", make_xlsx(aws_training_rows))
    report = await service.classify_upload("test.xlsx", make_xlsx(aws_query_rows))

    assert report.total == 1
    assert report.matched == 1
    assert report.match_rate == 100.0
    result = report.results[0]
    assert result.predicted_category == "Internet-related services"
    assert result.row_number == 2
    assert result.confidence == pytest.approx(0.5748, abs=1e-3)


@pytest.mark.asyncio
async def test_classify_with_empty_dictionary(service, make_xlsx, aws_query_rows):
    with pytest.raises(NoUsableDataError):
        await service.classify_upload("test.xlsx", make_xlsx(aws_query_rows))


@pytest.mark.asyncio
async def test_classify_without_valid_rows(service, make_xlsx):
    service.add_manual_entry("サーバー", "サーバー関連", "123456")
    rows = [QUERY_HEADER, ["サーバー", "", 100], ["", "ABC", 100]]
    with pytest.raises(NoUsableDataError):
        await service.classify_upload("test.xlsx", make_xlsx(rows))


@pytest.mark.asyncio
async def test_match_rate_and_warnings(service, make_csv):
    service.add_manual_entry("サーバー", "サーバー関連", "123456")
    rows = [
        QUERY_HEADER,
        ["サーバー保守", "ABC", 1000],
        ["コピー用紙", "文具店", 500],
        ["サーバー増設", "ABC", 9000],
        ["サーバー", "ABC", "unknown"],
    ]
    report = await service.classify_upload("test.csv", make_csv(rows))

    assert report.total == 3
    assert report.matched == 2
    assert report.match_rate == 66.7
    assert report.results[1].predicted_category == UNCLASSIFIED
    assert [w.row_number for w in report.warnings] == [5]


def test_classify_one(service):
    service.add_manual_entry("AWS, クラウド", "インターネット附随サービス", "734101")
    result = service.classify_one(QueryRow(item_name="AWS クラウド利用料", supplier_name="Amazon"))
    assert result.predicted_category == "インターネット附随サービス"


def test_classify_one_empty_dictionary(service):
    with pytest.raises(NoUsableDataError):
        service.classify_one(QueryRow(item_name="AWS"))


# ------------------------------------------------------------------
# Manual entries
# ------------------------------------------------------------------


def test_add_manual_entry(service, store):
    entry = service.add_manual_entry("AWS、S3", "インターネット附随サービス", "734101")
    assert store.get(entry.id) is entry
    assert store.stats().manual_entries == 1


def test_add_manual_entry_invalid(service, store):
    with pytest.raises(InputValidationError):
        service.add_manual_entry("", "Cat", "111111")
    assert len(store) == 0
