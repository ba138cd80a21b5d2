#!/usr/bin/env python3
"""
Similarity matcher - maps free-text vendor quotation rows onto BOQ items.

Every BOQ item is indexed on its description and unit. A quotation row is scored
against each field with fuzzywuzzy; a field whose distance (1 - similarity) is
within the configured threshold counts as a hit, and the item distance is the
weighted geometric combination of its hit fields. Items without any hit are not
candidates. Each quotation row is matched on its own, so two rows may point at
the same BOQ item.
"""

import sys
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from fuzzywuzzy import fuzz

from quote_compare.matchers.base_matcher import MatchProvider
from quote_compare.models import BOQItem, MatchAlternative, MatchingConfig, MatchResult, QuotationItem

EPSILON = sys.float_info.epsilon


def description_similarity(query: str, value: str) -> float:
    """Mean of plain and token-set ratios; only identical text reaches 100"""
    return (fuzz.ratio(query, value) + fuzz.token_set_ratio(query, value)) / 2


# Per-field scorers: units must match as a whole
FIELD_SCORERS: Dict[str, Callable[[str, str], float]] = {
    'description': description_similarity,
    'unit': fuzz.ratio,
}


class IndexEntry(NamedTuple):
    item: BOQItem
    fields: Dict[str, str]


class SimilarityMatcher(MatchProvider):
    """Fuzzy matcher over BOQ description and unit fields"""

    def __init__(self, config: Optional[MatchingConfig] = None):
        super().__init__()
        self.config = config or MatchingConfig()

        total_weight = self.config.description_weight + self.config.unit_weight
        self.field_weights = {
            'description': self.config.description_weight / total_weight,
            'unit': self.config.unit_weight / total_weight,
        }

    def build_index(self, boq_items: List[BOQItem]) -> List[IndexEntry]:
        """Normalize every BOQ item once, preserving insertion order"""
        return [
            IndexEntry(
                item=item,
                fields={field: self._normalize_text(getattr(item, field)) for field in self.field_weights}
            )
            for item in boq_items
        ]

    def _field_distance(self, field: str, query: str, value: str) -> Optional[float]:
        if not query or not value:
            return None
        similarity = FIELD_SCORERS[field](query, value)
        return 1 - similarity / 100

    def _candidate_distance(self, query: str, entry: IndexEntry) -> Optional[float]:
        """Combined distance for one BOQ item, or None if no field is within threshold"""
        distance = 1.0
        hit = False

        for field, weight in self.field_weights.items():
            if weight == 0:
                continue
            field_distance = self._field_distance(field, query, entry.fields[field])
            if field_distance is None or field_distance > self.config.distance_threshold:
                continue
            hit = True
            distance *= max(field_distance, EPSILON) ** weight

        return distance if hit else None

    def search(self, index: List[IndexEntry], query: str) -> List[Tuple[BOQItem, float]]:
        """Return (item, distance) candidates, best first; ties keep index order"""
        normalized_query = self._normalize_text(query)
        candidates = []
        for entry in index:
            distance = self._candidate_distance(normalized_query, entry)
            if distance is not None:
                candidates.append((entry.item, distance))

        # sorted() is stable, which gives the insertion-order tie-break
        return sorted(candidates, key=lambda candidate: candidate[1])

    def match(self, boq_items: List[BOQItem], quote_items: List[QuotationItem]) -> List[MatchResult]:
        index = self.build_index(boq_items)
        results = [self.match_one(index, quote) for quote in quote_items]

        matched = sum(1 for result in results if result.matched_boq_id)
        self.logger.debug(f"Matched {matched}/{len(results)} quotation rows against {len(index)} BOQ items")
        return results

    def match_one(self, index: List[IndexEntry], quote: QuotationItem) -> MatchResult:
        candidates = self.search(index, quote.description)
        if not candidates:
            self.logger.debug(f"No suitable match found for '{quote.description[:50]}'")
            return MatchResult(quote=quote, matched_boq_id=None, confidence=0.0, alternatives=[])

        best_item, best_distance = candidates[0]
        alternatives = [
            MatchAlternative(
                boq_id=item.id,
                label=f"{item.item_number} - {item.description}",
                score=1 - distance
            )
            for item, distance in candidates[1:1 + self.config.max_alternatives]
        ]

        confidence = 1 - best_distance
        self.logger.debug(f"Match: '{quote.description[:40]}' -> {best_item.id} ({confidence:.0%})")
        return MatchResult(
            quote=quote,
            matched_boq_id=best_item.id,
            confidence=confidence,
            alternatives=alternatives
        )

    def confidence_band(self, confidence: float) -> str:
        """Display band for a confidence value: high, medium or low"""
        if confidence >= self.config.high_confidence:
            return 'high'
        if confidence >= self.config.medium_confidence:
            return 'medium'
        return 'low'


def apply_manual_match(result: MatchResult, boq_id: str) -> MatchResult:
    """Reassign a match by hand; a human decision is taken at full confidence"""
    return result.model_copy(update={
        'matched_boq_id': boq_id,
        'confidence': 1.0,
        'manual': True,
        'alternatives': [alt for alt in result.alternatives if alt.boq_id != boq_id],
    })
