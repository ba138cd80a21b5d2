#!/usr/bin/env python3
"""
Policy engine - evaluates procurement rules and picks the approval route.
"""

import logging
from typing import List, Optional

from quote_compare.models import (
    ApprovalRoute,
    PolicyConfig,
    PolicyEvaluation,
    PolicyViolation,
    PolicyWarning,
    Severity
)


class PolicyEngine:
    """Hard rules produce violations, soft rules produce warnings"""

    def __init__(self, config: Optional[PolicyConfig] = None):
        self.config = config or PolicyConfig()
        self.logger = logging.getLogger(self.__class__.__name__)

    def evaluate_policies(
        self,
        total_cost: float,
        quote_count: int,
        unmatched_items_count: int,
        cost_variance: float
    ) -> PolicyEvaluation:
        violations: List[PolicyViolation] = []
        warnings: List[PolicyWarning] = []

        if total_cost > self.config.three_quote_cost_threshold and quote_count < self.config.min_quote_count:
            violations.append(PolicyViolation(
                policy='threeQuoteRule',
                message=(
                    f"Total cost > ${self.config.three_quote_cost_threshold:,.0f} requires "
                    f"{self.config.min_quote_count}+ quotes"
                ),
                severity=Severity.HIGH,
                action='ESCALATE_TO_PROCUREMENT'
            ))

        if unmatched_items_count > 0:
            violations.append(PolicyViolation(
                policy='specCompliance',
                message=f"{unmatched_items_count} items not in BOQ",
                severity=Severity.MEDIUM,
                action='FLAG_FOR_REVIEW'
            ))

        if cost_variance < self.config.low_variance_warning:
            warnings.append(PolicyWarning(message='Unusually low price; verify vendor capacity'))
        elif cost_variance > self.config.high_variance_warning:
            warnings.append(PolicyWarning(message='Unusually high price; consider renegotiation'))

        if violations:
            self.logger.info(f"Policy violations: {[v.policy for v in violations]}")

        return PolicyEvaluation(
            violations=violations,
            warnings=warnings,
            policy_checks_passed=len(violations) == 0
        )

    def determine_approval_route(self, total_cost: float, has_violations: bool) -> ApprovalRoute:
        # Violations always go to the most scrutinized tier, whatever the cost
        if has_violations:
            return ApprovalRoute.PROCUREMENT_MANAGER

        if total_cost <= self.config.procurement_manager_limit:
            return ApprovalRoute.PROCUREMENT_MANAGER
        elif total_cost <= self.config.finance_director_limit:
            return ApprovalRoute.FINANCE_DIRECTOR
        else:
            return ApprovalRoute.EXECUTIVE

    def is_preferred_vendor(self, vendor_name: str) -> bool:
        vendor = vendor_name.lower()
        return any(preferred.lower() in vendor for preferred in self.config.preferred_vendors)
