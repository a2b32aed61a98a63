"""Tests for text normalization helpers."""

from scope3dict.utils.text_normalizer import (
    contains_either_way,
    fold_case,
    normalize_text,
    to_half_width,
)


def test_full_width_alnum_shifted_to_ascii():
    assert to_half_width("ＡＷＳ ａｂｃ ０１９") == "AWS abc 019"


def test_non_alnum_full_width_untouched():
    """Only letters and digits are shifted; brackets and kana stay."""
    assert to_half_width("（株）テスト") == "（株）テスト"


def test_normalize_removes_all_whitespace():
    assert normalize_text(" ＡＷＳ　利用料\t2024 年\n") == "AWS利用料2024年"


def test_normalize_keeps_case():
    assert normalize_text("AbC dEf") == "AbCdEf"


def test_normalize_empty():
    assert normalize_text("") == ""
    assert normalize_text(None) == ""


def test_fold_case():
    assert fold_case("AWS") == fold_case("aws")


def test_contains_either_way():
    assert contains_either_way("aws", "AWSusagefee")
    assert contains_either_way("AWSusagefee", "aws")
    assert not contains_either_way("gcp", "AWSusagefee")
