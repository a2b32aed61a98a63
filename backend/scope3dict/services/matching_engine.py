"""Matching pass: score a query row against every dictionary entry.

Score terms (summed, not normalized):

    keyword     0.4 × share of the entry's keywords found in the query
    supplier    0.3 if any supplier hint matches the query supplier
    amount      0.2 if the amount falls inside the entry's range,
                0.1 if the entry has no range but an amount was given
    confidence  0.1 × the entry's own confidence

The best entry wins only if its score exceeds the acceptance threshold.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from scope3dict.errors import NoUsableDataError
from scope3dict.extraction.keyword_extractor import KeywordExtractor
from scope3dict.extraction.supplier_normalizer import normalize_supplier
from scope3dict.infra.config import MATCH_THRESHOLD
from scope3dict.models.dictionary_entry import DictionaryEntry
from scope3dict.models.match_result import MatchResult, ScoreBreakdown
from scope3dict.models.rows import QueryRow
from scope3dict.utils.text_normalizer import contains_either_way

logger = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.4
SUPPLIER_WEIGHT = 0.3
AMOUNT_IN_RANGE_WEIGHT = 0.2
AMOUNT_PRESENT_WEIGHT = 0.1
CONFIDENCE_WEIGHT = 0.1

MAX_MATCH_CONFIDENCE = 0.95


def score_entry(
    entry: DictionaryEntry,
    query_keywords: list[str],
    normalized_supplier: str,
    amount: float,
) -> ScoreBreakdown:
    matched = sum(
        1 for kw in entry.keywords
        if any(contains_either_way(kw, qk) for qk in query_keywords)
    )
    keyword = matched / len(entry.keywords) * KEYWORD_WEIGHT

    supplier = 0.0
    if entry.supplier_hints and normalized_supplier:
        if any(contains_either_way(hint, normalized_supplier) for hint in entry.supplier_hints):
            supplier = SUPPLIER_WEIGHT

    amount_score = 0.0
    if amount > 0:
        if entry.amount_range is not None:
            if entry.amount_range.contains(amount):
                amount_score = AMOUNT_IN_RANGE_WEIGHT
        else:
            amount_score = AMOUNT_PRESENT_WEIGHT

    return ScoreBreakdown(
        keyword=keyword,
        supplier=supplier,
        amount=amount_score,
        confidence=entry.confidence * CONFIDENCE_WEIGHT,
    )


class MatchingEngine:
    """Read-only matcher over a dictionary snapshot. Safe to share across threads."""

    def __init__(
        self,
        extractor: KeywordExtractor | None = None,
        threshold: float = MATCH_THRESHOLD,
    ):
        self.extractor = extractor or KeywordExtractor()
        self.threshold = threshold

    def match(self, query: QueryRow, dictionary: Sequence[DictionaryEntry]) -> MatchResult:
        if not dictionary:
            raise NoUsableDataError("辞書が空です。まず学習データから辞書を生成してください。")
        return self._match_one(query, dictionary)

    def match_batch(
        self,
        queries: Iterable[QueryRow],
        dictionary: Sequence[DictionaryEntry],
    ) -> list[MatchResult]:
        if not dictionary:
            raise NoUsableDataError("辞書が空です。まず学習データから辞書を生成してください。")
        results = [self._match_one(q, dictionary) for q in queries]
        logger.info(
            "Matching pass: %d/%d rows matched against %d entries",
            sum(1 for r in results if r.matched), len(results), len(dictionary),
        )
        return results

    def _match_one(self, query: QueryRow, dictionary: Sequence[DictionaryEntry]) -> MatchResult:
        query_keywords = self.extractor.extract(query.item_name)
        normalized_supplier = normalize_supplier(query.supplier_name)

        best_entry: DictionaryEntry | None = None
        best_score: ScoreBreakdown | None = None
        for entry in dictionary:
            score = score_entry(entry, query_keywords, normalized_supplier, query.amount)
            # strictly greater: the earlier entry keeps a tie
            if best_score is None or score.total > best_score.total:
                best_entry, best_score = entry, score

        if best_score is None or best_score.total <= self.threshold:
            return MatchResult(
                item_name=query.item_name,
                supplier_name=query.supplier_name,
                amount=query.amount,
                row_number=query.row_number,
            )

        return MatchResult(
            item_name=query.item_name,
            supplier_name=query.supplier_name,
            amount=query.amount,
            matched_entry=best_entry,
            confidence=min(best_score.total, MAX_MATCH_CONFIDENCE),
            predicted_category=best_entry.category,
            row_number=query.row_number,
            score=best_score,
        )
