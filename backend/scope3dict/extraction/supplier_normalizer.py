"""Supplier-name cleanup for use as a weak matching hint."""

import re

from scope3dict.utils.text_normalizer import strip_whitespace, to_half_width

# Non-greedy, brackets included. Full-width pairs are not touched by
# to_half_width, so both forms are still present when this runs.
_PAREN_RE = re.compile(r"\(.*?\)|（.*?）")

_JP_LEGAL_FORMS = ("株式会社", "有限会社", "合同会社", "合資会社", "合名会社", "㈱", "㈲")
_JP_LEGAL_RE = re.compile("|".join(re.escape(f) for f in _JP_LEGAL_FORMS))

# Latin forms only as whole words: "Incline" and "Help" survive.
# Longest form first within each family.
_LATIN_LEGAL_RE = re.compile(
    r"(?<![A-Za-z])(?:Corporation|Company|Limited|Corp|Inc|LLC|LLP|Ltd|LP|Co)(?![A-Za-z])\.?",
    re.IGNORECASE,
)

# Bank-statement markers for withdrawals / auto-debit, longest first
_NOISE_TOKENS = ("自動引落", "引き落とし", "引落し", "引落", "口座振替")
_NOISE_RE = re.compile("|".join(re.escape(t) for t in _NOISE_TOKENS))

_TRIM_CHARS = " ,.、・"

MIN_SUPPLIER_LEN = 2


def normalize_supplier(supplier: str | None) -> str:
    """Return the cleaned supplier name, or "" if too little is left."""
    if not supplier:
        return ""

    text = to_half_width(str(supplier))
    text = _PAREN_RE.sub("", text)
    text = _JP_LEGAL_RE.sub("", text)
    text = _LATIN_LEGAL_RE.sub("", text)
    text = _NOISE_RE.sub("", text)
    text = strip_whitespace(text).strip(_TRIM_CHARS)

    return text if len(text) >= MIN_SUPPLIER_LEN else ""
