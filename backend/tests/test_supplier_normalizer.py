"""Tests for supplier-name normalization."""

import pytest

from scope3dict.extraction.supplier_normalizer import normalize_supplier


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ABC Corp (Tokyo Office)", "ABC"),
        ("ABC Co., Ltd.", "ABC"),
        ("Example Inc.", "Example"),
        ("Widget LLC", "Widget"),
        ("株式会社サンプル商事（本社）", "サンプル商事"),
        ("サンプル商事㈱", "サンプル商事"),
        ("有限会社 山田工務店", "山田工務店"),
        ("Amazon Web Services Japan", "AmazonWebServicesJapan"),
        ("ＡＢＣ　システム", "ABCシステム"),
    ],
)
def test_normalize_supplier(raw, expected):
    assert normalize_supplier(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ABC Corporation", "ABC"),
        ("ABC Limited", "ABC"),
        ("ABC Company", "ABC"),
        ("abc company limited", "abc"),
        ("Smith & Jones LLP", "Smith&Jones"),
        ("Harbor Partners LP", "HarborPartners"),
    ],
)
def test_spelled_out_and_partnership_forms(raw, expected):
    assert normalize_supplier(raw) == expected


def test_latin_forms_only_as_whole_words():
    assert normalize_supplier("Cosmo Incline") == "CosmoIncline"
    assert normalize_supplier("Help Desk Limitedness") == "HelpDeskLimitedness"


def test_bank_statement_markers_removed():
    assert normalize_supplier("東京電力 口座振替") == "東京電力"
    assert normalize_supplier("NTT東日本 自動引落") == "NTT東日本"
    assert normalize_supplier("引き落とし ソフトバンク") == "ソフトバンク"


def test_too_short_after_cleanup():
    assert normalize_supplier("A") == ""
    assert normalize_supplier("株式会社A") == ""
    assert normalize_supplier("(本社)") == ""


def test_empty_input():
    assert normalize_supplier("") == ""
    assert normalize_supplier(None) == ""


def test_idempotent():
    once = normalize_supplier("株式会社サンプル商事（本社）")
    assert normalize_supplier(once) == once
