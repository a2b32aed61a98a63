"""Canonical forms for item and supplier strings.

Full-width Latin letters and digits (Ａ-Ｚ, ａ-ｚ, ０-９) sit exactly 0xFEE0
above their ASCII counterparts, so width folding is a plain codepoint shift.
Case is left alone here; callers fold case only when comparing.
"""

import re

_FULLWIDTH_OFFSET = 0xFEE0
_FULLWIDTH_ALNUM_RE = re.compile(r"[Ａ-Ｚａ-ｚ０-９]")
_WHITESPACE_RE = re.compile(r"\s+")


def to_half_width(text: str) -> str:
    return _FULLWIDTH_ALNUM_RE.sub(lambda m: chr(ord(m.group(0)) - _FULLWIDTH_OFFSET), text)


def strip_whitespace(text: str) -> str:
    # \s covers the ideographic space (U+3000) as well
    return _WHITESPACE_RE.sub("", text)


def normalize_text(text: str | None) -> str:
    if not text:
        return ""
    return strip_whitespace(to_half_width(str(text)))


def fold_case(text: str) -> str:
    return text.casefold()


def contains_either_way(a: str, b: str) -> bool:
    """Case-insensitive containment in either direction."""
    a, b = fold_case(a), fold_case(b)
    return a in b or b in a
