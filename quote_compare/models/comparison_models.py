#!/usr/bin/env python3
"""
Pydantic models for vendor comparison, policy evaluation and approval results.
"""

from datetime import datetime, timezone
from enum import Enum
from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional

from .base_models import CamelModel


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Recommendation(str, Enum):
    RECOMMENDED = "RECOMMENDED"
    ACCEPTABLE = "ACCEPTABLE"
    FLAG_REVIEW = "FLAG_REVIEW"


class ApprovalRoute(str, Enum):
    PROCUREMENT_MANAGER = "PROCUREMENT_MANAGER"
    FINANCE_DIRECTOR = "FINANCE_DIRECTOR"
    EXECUTIVE = "EXECUTIVE"


class ComparisonStatus(str, Enum):
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Decision(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class MatchedItem(CamelModel):
    """Quote line whose SKU exists in the BOQ"""
    boq_line_no: int
    sku: str
    description: str
    boq_qty: float
    boq_price: float
    quote_qty: float
    quote_price: float
    variance: float
    matched: bool = True
    is_outlier: bool = False
    outlier_reason: Optional[str] = None


class UnmatchedItem(CamelModel):
    """Quote line whose SKU is not in the BOQ"""
    sku: str
    qty: float
    quote_price: float
    matched: bool = False
    reason: str = "SKU not in BOQ"


class VendorScore(CamelModel):
    """Point-in-time score for one vendor within a comparison"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    vendor_id: str
    vendor_name: str
    total_cost: float
    variance: float
    compliance_score: float
    delivery_days: int
    score: float
    recommendation: Recommendation
    matched_count: int = 0
    unmatched_count: int = 0
    outlier_count: int = 0


class PolicyViolation(CamelModel):
    policy: str
    message: str
    severity: Severity
    action: str


class PolicyWarning(CamelModel):
    message: str
    severity: Severity = Severity.MEDIUM


class PolicyEvaluation(CamelModel):
    violations: List[PolicyViolation] = []
    warnings: List[PolicyWarning] = []
    policy_checks_passed: bool = True


class AuditLogEntry(CamelModel):
    timestamp: str = Field(default_factory=utc_now)
    action: str
    details: Any = None
    user_id: str = "system"
    status: str = "SUCCESS"


class PurchaseOrder(CamelModel):
    success: bool
    po_number: str
    po_id: str
    status: str
    created_at: str
    vendor_notification_sent: bool = False


class ComparisonResult(CamelModel):
    """Ranked vendor comparison awaiting (or past) approval"""
    id: str
    boq_id: Optional[str] = None
    quotes: List[VendorScore] = []
    best_vendor: str = "N/A"
    cost_savings: float = 0
    approval_route: ApprovalRoute
    status: ComparisonStatus = ComparisonStatus.PENDING_APPROVAL
    created_at: str = Field(default_factory=utc_now)
    updated_at: Optional[str] = None
    policy_evaluation: PolicyEvaluation
    audit_log: List[AuditLogEntry] = []
    purchase_order: Optional[PurchaseOrder] = None

    @property
    def best_score(self) -> Optional[VendorScore]:
        return self.quotes[0] if self.quotes else None


class ApprovalResult(CamelModel):
    id: str
    comparison_id: str
    decision: Decision
    timestamp: str = Field(default_factory=utc_now)
    next_step: str
    approval_id: str
    message: str
    po_details: Optional[PurchaseOrder] = None


class KPIMetrics(CamelModel):
    total_processed: int
    avg_processing_time: str
    stp_rate: float
    auto_approved_count: int
    escalated_count: int
    total_cost_savings: float
    avg_cost_savings: float
    error_rate: float
