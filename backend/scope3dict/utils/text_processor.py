"""Decoding of uploaded CSV bytes.

Procurement exports are either UTF-8 (often with a BOM, as written by
Excel's "CSV UTF-8") or CP932 from older accounting tools. Uploads are
size-capped, so the whole payload is tried against each codec.
"""

import logging

logger = logging.getLogger(__name__)

# utf-8-sig also accepts plain UTF-8 and drops a leading BOM
CSV_ENCODINGS = ("utf-8-sig", "cp932")


def detect_encoding(raw: bytes) -> str | None:
    """First codec in CSV_ENCODINGS that decodes all of ``raw``, else None."""
    for encoding in CSV_ENCODINGS:
        try:
            raw.decode(encoding)
        except UnicodeDecodeError:
            continue
        return encoding
    return None


def decode_text(raw: bytes) -> str:
    encoding = detect_encoding(raw)
    if encoding is None:
        logger.warning("CSV is neither UTF-8 nor CP932, decoding with replacement characters")
        return raw.decode("utf-8", errors="replace")
    return raw.decode(encoding)
