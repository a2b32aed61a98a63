"""Keyword extraction from procurement item descriptions.

Two token classes are scanned separately:

- ideographic/syllabic runs: katakana (2+ chars, incl. the prolonged sound
  mark), hiragana (2+ chars) and kanji (1+ chars, incl. 々)
- alphanumeric runs: Latin letters and digits, 2+ chars

Each class gets its own length window and noise filter. Survivors are
concatenated Japanese first, then alphanumeric, each in order of appearance,
before deduplication and the 8-keyword cap.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from scope3dict.infra.config import KEYWORD_STOPWORDS
from scope3dict.utils.text_normalizer import normalize_text

MAX_KEYWORDS = 8

_JP_RE = re.compile(r"[ァ-ヶー]{2,}|[ぁ-ん]{2,}|[一-龯々]+")
_ALNUM_RE = re.compile(r"[A-Za-z0-9]{2,}")

_JP_MIN_LEN, _JP_MAX_LEN = 2, 8
_ALNUM_MIN_LEN, _ALNUM_MAX_LEN = 2, 12

# Legal-entity abbreviations that leak in from item text ("ABC CO LTD")
_ALNUM_NOISE = frozenset({"LTD", "INC", "CO"})


class KeywordExtractor:
    """Pulls up to 8 candidate keywords out of a description."""

    def __init__(self, stopwords: Iterable[str] = KEYWORD_STOPWORDS):
        self.stopwords = frozenset(stopwords)

    def extract(self, text: str | None) -> list[str]:
        normalized = normalize_text(text)
        if not normalized:
            return []

        jp = [t for t in _JP_RE.findall(normalized) if self._keep_jp(t)]
        alnum = [t for t in _ALNUM_RE.findall(normalized) if self._keep_alnum(t)]

        keywords: list[str] = []
        for token in jp + alnum:
            if token not in keywords:
                keywords.append(token)
                if len(keywords) == MAX_KEYWORDS:
                    break
        return keywords

    def _keep_jp(self, token: str) -> bool:
        if not _JP_MIN_LEN <= len(token) <= _JP_MAX_LEN:
            return False
        return token not in self.stopwords

    @staticmethod
    def _keep_alnum(token: str) -> bool:
        if not _ALNUM_MIN_LEN <= len(token) <= _ALNUM_MAX_LEN:
            return False
        if token.isdigit():
            return False
        return token.upper() not in _ALNUM_NOISE


_default_extractor = KeywordExtractor()


def extract_keywords(text: str | None) -> list[str]:
    return _default_extractor.extract(text)
