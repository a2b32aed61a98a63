"""Operator-defined dictionary entries, bypassing the learning pass."""

import re

from scope3dict.errors import InputValidationError
from scope3dict.models.dictionary_entry import DictionaryEntry

MANUAL_CONFIDENCE = 0.90

KEYWORD_MIN_LEN, KEYWORD_MAX_LEN = 2, 12

# ASCII comma and the ideographic comma
_KEYWORD_SEP_RE = re.compile(r"[,、]")


def split_keywords(keyword_text: str) -> list[str]:
    keywords: list[str] = []
    for piece in _KEYWORD_SEP_RE.split(keyword_text):
        piece = piece.strip()
        if KEYWORD_MIN_LEN <= len(piece) <= KEYWORD_MAX_LEN and piece not in keywords:
            keywords.append(piece)
    return keywords


def build_manual_entry(keyword_text: str, category: str, category_code: str) -> DictionaryEntry:
    """Build a manual entry from free-text input.

    Pieces shorter than 2 or longer than 12 characters are dropped. Raises
    InputValidationError if any field is blank or no keyword survives.
    """
    keyword_text = (keyword_text or "").strip()
    category = (category or "").strip()
    category_code = (category_code or "").strip()

    if not keyword_text or not category or not category_code:
        raise InputValidationError("キーワード・カテゴリ名・カテゴリコードをすべて入力してください。")

    keywords = split_keywords(keyword_text)
    if not keywords:
        raise InputValidationError("有効なキーワードがありません。2〜12文字のキーワードをカンマ区切りで入力してください。")

    return DictionaryEntry(
        keywords=keywords[:8],
        category=category,
        category_code=category_code,
        confidence=MANUAL_CONFIDENCE,
        source="manual",
        frequency=1,
    )
