#!/usr/bin/env python3
"""
Vendor scorer - turns one vendor's SKU match outcome into a comparable score.

    variance = (total_cost - boq_total) / boq_total * 100   (0 when boq_total is 0)
    score    = 100 - |variance| * 0.5 + compliance * 0.2

The score is deliberately left unclamped; it can exceed 100 or drop below 0.
"""

import logging
from typing import List, Optional

from quote_compare.matchers import ExactMatchOutcome
from quote_compare.models import ComplianceMode, Quote, Recommendation, ScoringConfig, VendorScore


class VendorScorer:
    """Scores and ranks vendor quotes against a BOQ total"""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()
        self.logger = logging.getLogger(self.__class__.__name__)

    def total_variance(self, total_cost: float, boq_total: float) -> float:
        if boq_total == 0:
            return 0.0
        return (total_cost - boq_total) / boq_total * 100

    def compliance_score(self, outcome: ExactMatchOutcome) -> float:
        unmatched = len(outcome.unmatched)
        if unmatched == 0:
            return self.config.full_compliance_score

        if self.config.compliance_mode == ComplianceMode.PROPORTIONAL:
            total = len(outcome.matches) + unmatched
            return self.config.full_compliance_score - unmatched / total * 100

        return self.config.partial_compliance_score

    def recommend(self, score: float) -> Recommendation:
        if score > self.config.recommended_threshold:
            return Recommendation.RECOMMENDED
        if score > self.config.acceptable_threshold:
            return Recommendation.ACCEPTABLE
        return Recommendation.FLAG_REVIEW

    def delivery_days(self, quote: Quote) -> int:
        if quote.items and quote.items[0].lead_time:
            return quote.items[0].lead_time
        return self.config.default_delivery_days

    def score_vendor(self, quote: Quote, outcome: ExactMatchOutcome, boq_total: float) -> VendorScore:
        total_cost = quote.total_cost or 0
        variance = self.total_variance(total_cost, boq_total)
        compliance = self.compliance_score(outcome)
        score = 100 - abs(variance) * self.config.variance_weight + compliance * self.config.compliance_weight
        recommendation = self.recommend(score)

        self.logger.debug(
            f"{quote.vendor_name}: variance {variance:.2f}%, compliance {compliance:g}, "
            f"score {score:.2f} -> {recommendation.value}"
        )

        return VendorScore(
            vendor_id=quote.vendor_id,
            vendor_name=quote.vendor_name,
            total_cost=total_cost,
            variance=variance,
            compliance_score=compliance,
            delivery_days=self.delivery_days(quote),
            score=score,
            recommendation=recommendation,
            matched_count=len(outcome.matches),
            unmatched_count=len(outcome.unmatched),
            outlier_count=outcome.outlier_count
        )

    @staticmethod
    def rank(scores: List[VendorScore]) -> List[VendorScore]:
        """Highest score first; equal scores keep submission order"""
        return sorted(scores, key=lambda s: s.score, reverse=True)

    @staticmethod
    def cost_savings(boq_total: float, best: Optional[VendorScore]) -> float:
        """Estimate minus the best vendor's cost; negative when the vendor is dearer"""
        return boq_total - (best.total_cost if best else 0)
