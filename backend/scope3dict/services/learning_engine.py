"""Learning pass: labelled historical rows → dictionary entries.

Rows are grouped by their exact category label. Each group with enough
evidence becomes one learned entry:

1. keyword frequency across the group's item names
2. keep tokens seen in at least 10% of the rows, top 6 by frequency
3. 6-digit category code + name parsed from the label
4. up to 4 normalized supplier names as hints
5. min/max of the positive amounts
6. confidence grows with log10(group size), capped at 0.95

The engine never touches the store; callers commit the returned batch.
"""

from __future__ import annotations

import asyncio
import logging
import math
import re
from collections import Counter
from collections.abc import Iterable, Sequence

from scope3dict.errors import NoUsableDataError
from scope3dict.extraction.keyword_extractor import KeywordExtractor
from scope3dict.extraction.supplier_normalizer import normalize_supplier
from scope3dict.infra.config import LABEL_PREFIX, LEARN_YIELD_EVERY, SOURCE_MARKER
from scope3dict.models.dictionary_entry import AmountRange, DictionaryEntry
from scope3dict.models.rows import TrainingRow

logger = logging.getLogger(__name__)

MIN_GROUP_SIZE = 2
MIN_FREQ_RATIO = 0.1
MAX_SIGNIFICANT_KEYWORDS = 6
MAX_SUPPLIER_HINTS = 4

CONFIDENCE_FLOOR = 0.70
CONFIDENCE_CEILING = 0.95

_LABEL_RE = re.compile(r"(\d{6})\s+(.+?)\s*$")


def parse_category_label(label: str, prefix: str = LABEL_PREFIX) -> tuple[str, str]:
    """Split a label into (category_code, category_name).

    "環境省DB 5産連表 734101 インターネット附随サービス" → ("734101", "インターネット附随サービス").
    Labels without a code fall back to the label minus the known prefix.
    """
    m = _LABEL_RE.search(label)
    if m:
        return m.group(1), m.group(2).strip()
    name = label.replace(prefix, "", 1) if prefix else label
    return "", name.strip()


def learned_confidence(group_size: int) -> float:
    raw = CONFIDENCE_FLOOR + math.log10(group_size + 1) / 10
    return min(CONFIDENCE_CEILING, max(CONFIDENCE_FLOOR, raw))


class LearningEngine:
    """Builds learned dictionary entries from labelled training rows."""

    def __init__(
        self,
        extractor: KeywordExtractor | None = None,
        source_marker: str = SOURCE_MARKER,
        label_prefix: str = LABEL_PREFIX,
    ):
        self.extractor = extractor or KeywordExtractor()
        self.source_marker = source_marker
        self.label_prefix = label_prefix

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def learn(
        self,
        rows: Iterable[TrainingRow],
        existing: Sequence[DictionaryEntry] = (),
    ) -> list[DictionaryEntry]:
        groups = self.group_rows(rows)
        entries: list[DictionaryEntry] = []
        for label, members in groups.items():
            entry = self.build_entry(label, members)
            if entry is not None:
                entries.append(entry)
        self._log_summary(groups, entries, existing)
        return entries

    async def learn_async(
        self,
        rows: Iterable[TrainingRow],
        existing: Sequence[DictionaryEntry] = (),
        yield_every: int = LEARN_YIELD_EVERY,
    ) -> list[DictionaryEntry]:
        """Same as learn(), checkpointing with the event loop between groups.

        Cancelling at a checkpoint discards the partial batch; nothing has
        reached the store yet.
        """
        groups = self.group_rows(rows)
        entries: list[DictionaryEntry] = []
        for i, (label, members) in enumerate(groups.items(), 1):
            entry = self.build_entry(label, members)
            if entry is not None:
                entries.append(entry)
            if yield_every > 0 and i % yield_every == 0:
                await asyncio.sleep(0)
        self._log_summary(groups, entries, existing)
        return entries

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def is_eligible(self, row: TrainingRow) -> bool:
        label = row.category_label
        if not label:
            return False
        return self.source_marker in label

    def group_rows(self, rows: Iterable[TrainingRow]) -> dict[str, list[TrainingRow]]:
        """Group eligible rows by exact label, first-seen label order.

        Raises NoUsableDataError when no row is eligible.
        """
        groups: dict[str, list[TrainingRow]] = {}
        for row in rows:
            if not self.is_eligible(row):
                continue
            groups.setdefault(row.category_label, []).append(row)

        if not groups:
            raise NoUsableDataError(
                f"「{self.source_marker}」の排出原単位が設定された学習データが見つかりません。"
                if self.source_marker
                else "カテゴリが設定された学習データが見つかりません。"
            )
        return groups

    def build_entry(self, label: str, members: list[TrainingRow]) -> DictionaryEntry | None:
        """One learned entry for a label group, or None if evidence is too thin."""
        group_size = len(members)
        if group_size < MIN_GROUP_SIZE:
            return None

        keywords = self.significant_keywords(members)
        if not keywords:
            logger.debug("No significant keywords for label %r (%d rows)", label, group_size)
            return None

        category_code, category = parse_category_label(label, self.label_prefix)

        return DictionaryEntry(
            keywords=keywords,
            category=category,
            category_code=category_code,
            confidence=learned_confidence(group_size),
            source="learned",
            frequency=group_size,
            amount_range=self._amount_range(members),
            supplier_hints=self._supplier_hints(members),
        )

    def significant_keywords(self, members: list[TrainingRow]) -> list[str]:
        # Counter keeps insertion order, and sorted() is stable, so equal
        # counts stay in first-seen order.
        freq: Counter = Counter()
        for row in members:
            freq.update(self.extractor.extract(row.item_name))

        min_freq = max(1, math.floor(len(members) * MIN_FREQ_RATIO))
        survivors = [(kw, n) for kw, n in freq.items() if n >= min_freq]
        survivors.sort(key=lambda kv: kv[1], reverse=True)
        return [kw for kw, _ in survivors[:MAX_SIGNIFICANT_KEYWORDS]]

    @staticmethod
    def _supplier_hints(members: list[TrainingRow]) -> list[str]:
        hints: list[str] = []
        for row in members:
            normalized = normalize_supplier(row.supplier_name)
            if normalized and normalized not in hints:
                hints.append(normalized)
        return hints[:MAX_SUPPLIER_HINTS]

    @staticmethod
    def _amount_range(members: list[TrainingRow]) -> AmountRange | None:
        amounts = sorted(row.amount for row in members if row.amount > 0)
        if not amounts:
            return None
        return AmountRange(min=amounts[0], max=amounts[-1])

    @staticmethod
    def _log_summary(
        groups: dict[str, list[TrainingRow]],
        entries: list[DictionaryEntry],
        existing: Sequence[DictionaryEntry],
    ) -> None:
        known = {e.category for e in existing}
        repeated = sum(1 for e in entries if e.category in known)
        logger.info(
            "Learning pass: %d label groups, %d entries created (%d for categories already in dictionary)",
            len(groups), len(entries), repeated,
        )
