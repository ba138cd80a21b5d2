#!/usr/bin/env python3
"""
Exact-key matcher - pairs vendor quote lines with BOQ lines by SKU.
SKUs are compared as-is (case-sensitive, no fuzzing).
"""

import logging
from typing import Dict, List, NamedTuple, Optional

from quote_compare.models import BOQLineItem, MatchedItem, QuoteLineItem, UnmatchedItem


class ExactMatchOutcome(NamedTuple):
    matches: List[MatchedItem]
    unmatched: List[UnmatchedItem]

    @property
    def outlier_count(self) -> int:
        return sum(1 for item in self.matches if item.is_outlier)


class ExactKeyMatcher:
    """Partitions quote lines into BOQ matches and unmatched lines"""

    def __init__(self, outlier_threshold: float = 30.0):
        self.outlier_threshold = outlier_threshold
        self.logger = logging.getLogger(self.__class__.__name__)

    def match_items(self, boq_items: List[BOQLineItem], quote_items: List[QuoteLineItem]) -> ExactMatchOutcome:
        """Every quote line ends up in exactly one list, in input order"""
        by_sku: Dict[str, BOQLineItem] = {}
        for boq_item in boq_items:
            # First BOQ line with a given SKU wins
            by_sku.setdefault(boq_item.sku, boq_item)

        matches: List[MatchedItem] = []
        unmatched: List[UnmatchedItem] = []

        for quote_item in quote_items:
            boq_item = by_sku.get(quote_item.sku)
            if boq_item is None:
                unmatched.append(UnmatchedItem(
                    sku=quote_item.sku,
                    qty=quote_item.qty,
                    quote_price=quote_item.unit_price
                ))
                continue

            variance = self.calculate_variance(boq_item.estimated_price, quote_item.unit_price)
            is_outlier = abs(variance) > self.outlier_threshold
            matches.append(MatchedItem(
                boq_line_no=boq_item.line_no,
                sku=quote_item.sku,
                description=boq_item.description,
                boq_qty=boq_item.qty,
                boq_price=boq_item.estimated_price,
                quote_qty=quote_item.qty,
                quote_price=quote_item.unit_price,
                variance=variance,
                is_outlier=is_outlier,
                outlier_reason=self._outlier_reason(variance) if is_outlier else None
            ))

        self.logger.debug(f"SKU matching: {len(matches)} matched, {len(unmatched)} unmatched")
        return ExactMatchOutcome(matches, unmatched)

    def _outlier_reason(self, variance: float) -> Optional[str]:
        return f"Price variance {variance:.2f}% exceeds {self.outlier_threshold:g}% threshold"

    @staticmethod
    def calculate_variance(boq_price: float, quote_price: float) -> float:
        """Percentage difference of the quoted price against the BOQ estimate"""
        if boq_price == 0:
            return 0.0
        return (quote_price - boq_price) / boq_price * 100
