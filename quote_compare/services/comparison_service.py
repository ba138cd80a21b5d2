#!/usr/bin/env python3
"""
Comparison orchestrator - runs SKU matching, vendor scoring and policy evaluation
for one BOQ and its vendor quotes, then records the result.
"""

import logging
import time
import uuid
from typing import List, Optional

from quote_compare.matchers import ExactKeyMatcher
from quote_compare.models import (
    AppConfig,
    AuditLogEntry,
    BOQ,
    ComparisonResult,
    ComparisonStatus,
    Quote,
    VendorScore
)
from quote_compare.services.comparison_store import ComparisonStore
from quote_compare.services.metrics_store import MetricsStore
from quote_compare.services.notification_service import NotificationService
from quote_compare.services.orchestrate_client import OrchestrateClient
from quote_compare.services.policy_engine import PolicyEngine
from quote_compare.services.vendor_scorer import VendorScorer


class ComparisonService:
    """Builds ranked, policy-checked vendor comparisons"""

    def __init__(
        self,
        config: AppConfig,
        store: ComparisonStore,
        metrics: MetricsStore,
        notifier: Optional[NotificationService] = None,
        orchestrator: Optional[OrchestrateClient] = None
    ):
        self.config = config
        self.store = store
        self.metrics = metrics
        self.notifier = notifier
        self.orchestrator = orchestrator
        self.matcher = ExactKeyMatcher(config.scoring.outlier_variance_threshold)
        self.scorer = VendorScorer(config.scoring)
        self.policy_engine = PolicyEngine(config.policy)
        self.logger = logging.getLogger(self.__class__.__name__)

    def score_quotes(self, boq: BOQ, quotes: List[Quote]) -> List[VendorScore]:
        """Score every usable quote; quotes (or a BOQ) without items are skipped"""
        scores = []
        for quote in quotes:
            if quote.items is None:
                self.logger.warning(f"Quote {quote.vendor_id} has no items array, skipping")
                continue
            if boq.items is None:
                self.logger.warning(f"BOQ {boq.id} has no items array, skipping quote {quote.vendor_id}")
                continue

            outcome = self.matcher.match_items(boq.items, quote.items)
            scores.append(self.scorer.score_vendor(quote, outcome, boq.total_boq))

        return self.scorer.rank(scores)

    def create_comparison(self, boq: BOQ, quotes: List[Quote]) -> ComparisonResult:
        start_time = time.perf_counter()
        try:
            comparison = self._build_comparison(boq, quotes)
        except Exception:
            self.metrics.record(error=True)
            raise

        self.store.save(comparison)

        processing_time = time.perf_counter() - start_time
        passed = comparison.policy_evaluation.policy_checks_passed
        self.metrics.record(
            processing_time=processing_time,
            auto_approved=passed,
            escalated=not passed,
            cost_savings=comparison.cost_savings
        )
        self.logger.info(f"Comparison created: {comparison.id} ({processing_time:.2f}s)")

        self._trigger_flow(boq, quotes)
        self._notify(comparison)
        return comparison

    def _build_comparison(self, boq: BOQ, quotes: List[Quote]) -> ComparisonResult:
        scores = self.score_quotes(boq, quotes)
        best = scores[0] if scores else None

        total_cost = best.total_cost if best else 0
        policy_evaluation = self.policy_engine.evaluate_policies(
            total_cost,
            len(quotes),
            best.unmatched_count if best else 0,
            best.variance if best else 0
        )
        approval_route = self.policy_engine.determine_approval_route(
            total_cost,
            not policy_evaluation.policy_checks_passed
        )

        return ComparisonResult(
            id=f"comp-{uuid.uuid4()}",
            boq_id=boq.id,
            quotes=scores,
            best_vendor=best.vendor_name if best else 'N/A',
            cost_savings=self.scorer.cost_savings(boq.total_boq, best),
            approval_route=approval_route,
            status=ComparisonStatus.PENDING_APPROVAL,
            policy_evaluation=policy_evaluation,
            audit_log=[AuditLogEntry(
                action='COMPARISON_CREATED',
                details=f"Comparison created with {len(quotes)} vendor quotes"
            )]
        )

    def get_comparison(self, comparison_id: str) -> Optional[ComparisonResult]:
        return self.store.get(comparison_id)

    def list_comparisons(self) -> List[ComparisonResult]:
        return self.store.list()

    def _trigger_flow(self, boq: BOQ, quotes: List[Quote]) -> None:
        if self.orchestrator is None:
            return
        try:
            result = self.orchestrator.trigger_comparison_flow(boq, quotes)
            self.logger.debug(f"Comparison flow status: {result.get('status')}")
        except Exception as e:
            self.logger.warning(f"Failed to trigger comparison flow: {e}")

    def _notify(self, comparison: ComparisonResult) -> None:
        if self.notifier is None:
            return
        best = comparison.best_score
        payload = {
            'id': comparison.id,
            'totalCost': best.total_cost if best else None,
            'bestVendor': comparison.best_vendor,
            'costSavings': comparison.cost_savings,
            'approvalRoute': comparison.approval_route.value,
        }
        try:
            self.notifier.send_slack_notification(payload, self.config.integrations.default_approver_email)
        except Exception as e:
            self.logger.warning(f"Failed to send Slack notification: {e}")
