"""Business logic for learning from and classifying uploaded tables.

Ties the collaborators together: table reader → row parser → engine →
dictionary store. A pass either commits all of its entries to the store or
none of them.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from scope3dict.db.dictionary_store import DictionaryStore
from scope3dict.errors import NoUsableDataError
from scope3dict.models.dictionary_entry import DictionaryEntry
from scope3dict.models.match_result import MatchResult
from scope3dict.models.rows import QueryRow
from scope3dict.services.learning_engine import LearningEngine
from scope3dict.services.manual_entry import build_manual_entry
from scope3dict.services.matching_engine import MatchingEngine
from scope3dict.services.row_parser import RowWarning, parse_query_rows, parse_training_rows
from scope3dict.utils.table_reader import read_table

logger = logging.getLogger(__name__)


@dataclass
class LearningReport:
    total_rows: int
    valid_rows: int
    eligible_rows: int
    category_groups: int
    entries: list[DictionaryEntry] = field(default_factory=list)
    warnings: list[RowWarning] = field(default_factory=list)


@dataclass
class MatchReport:
    results: list[MatchResult] = field(default_factory=list)
    warnings: list[RowWarning] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def matched(self) -> int:
        return sum(1 for r in self.results if r.matched)

    @property
    def match_rate(self) -> float:
        """Matched share in percent, one decimal."""
        if not self.results:
            return 0.0
        return round(self.matched / self.total * 100, 1)


class ClassificationService:
    """Owns the engines and writes to one DictionaryStore."""

    def __init__(
        self,
        store: DictionaryStore,
        learning_engine: LearningEngine | None = None,
        matching_engine: MatchingEngine | None = None,
    ):
        self.store = store
        self.learning_engine = learning_engine or LearningEngine()
        self.matching_engine = matching_engine or MatchingEngine()

    async def learn_from_upload(self, filename: str, content: bytes) -> LearningReport:
        """Run a learning pass over an uploaded training table.

        Raises TableParseError / NoUsableDataError; the store is untouched on
        failure.
        """
        logger.info("Learning pass started: %s (%d bytes)", filename, len(content))

        table = await asyncio.to_thread(read_table, filename, content)
        parsed = parse_training_rows(table)
        for w in parsed.warnings:
            logger.warning("Training row %d skipped: %s", w.row_number, w.reason)

        eligible = [row for row in parsed.rows if self.learning_engine.is_eligible(row)]
        group_count = len({row.category_label for row in eligible})

        try:
            entries = await self.learning_engine.learn_async(eligible, self.store.snapshot())
        except NoUsableDataError:
            logger.warning("Learning pass rejected: %s has no eligible rows", filename)
            raise
        except Exception:
            logger.error("Learning pass failed: %s", filename, exc_info=True)
            raise
        self.store.extend(entries)

        return LearningReport(
            total_rows=parsed.total,
            valid_rows=len(parsed.rows),
            eligible_rows=len(eligible),
            category_groups=group_count,
            entries=entries,
            warnings=parsed.warnings,
        )

    async def classify_upload(self, filename: str, content: bytes) -> MatchReport:
        """Match every row of an uploaded query table against the dictionary."""
        snapshot = self.store.snapshot()
        if not snapshot:
            raise NoUsableDataError("辞書が空です。まず学習データから辞書を生成してください。")

        logger.info(
            "Matching pass started: %s (%d bytes, %d entries)",
            filename, len(content), len(snapshot),
        )
        table = await asyncio.to_thread(read_table, filename, content)
        parsed = parse_query_rows(table)
        for w in parsed.warnings:
            logger.warning("Query row %d skipped: %s", w.row_number, w.reason)

        if not parsed.rows:
            raise NoUsableDataError("有効なテストデータが見つかりません。")

        results = await asyncio.to_thread(
            self.matching_engine.match_batch, parsed.rows, snapshot
        )
        return MatchReport(results=results, warnings=parsed.warnings)

    def classify_one(self, query: QueryRow) -> MatchResult:
        return self.matching_engine.match(query, self.store.snapshot())

    def add_manual_entry(self, keyword_text: str, category: str, category_code: str) -> DictionaryEntry:
        entry = build_manual_entry(keyword_text, category, category_code)
        self.store.append(entry)
        logger.info("Manual entry added: %s (%s) keywords=%s", entry.category, entry.category_code, entry.keywords)
        return entry
