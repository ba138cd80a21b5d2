#!/usr/bin/env python3
"""
Models package for QuoteCompare.
"""

from .base_models import (
    BOQ,
    BOQItem,
    BOQLineItem,
    MatchAlternative,
    MatchResult,
    QuotationItem,
    Quote,
    QuoteLineItem,
    Selection
)
from .comparison_models import (
    ApprovalResult,
    ApprovalRoute,
    AuditLogEntry,
    ComparisonResult,
    ComparisonStatus,
    Decision,
    KPIMetrics,
    MatchedItem,
    PolicyEvaluation,
    PolicyViolation,
    PolicyWarning,
    PurchaseOrder,
    Recommendation,
    Severity,
    UnmatchedItem,
    VendorScore
)
from .config_models import (
    AppConfig,
    ComplianceMode,
    ConfigSection,
    ConfigUpdateRequest,
    IntegrationsConfig,
    MatchingConfig,
    PolicyConfig,
    ScoringConfig
)

__all__ = [
    "BOQ",
    "BOQItem",
    "BOQLineItem",
    "MatchAlternative",
    "MatchResult",
    "QuotationItem",
    "Quote",
    "QuoteLineItem",
    "Selection",
    "ApprovalResult",
    "ApprovalRoute",
    "AuditLogEntry",
    "ComparisonResult",
    "ComparisonStatus",
    "Decision",
    "KPIMetrics",
    "MatchedItem",
    "PolicyEvaluation",
    "PolicyViolation",
    "PolicyWarning",
    "PurchaseOrder",
    "Recommendation",
    "Severity",
    "UnmatchedItem",
    "VendorScore",
    "AppConfig",
    "ComplianceMode",
    "ConfigSection",
    "ConfigUpdateRequest",
    "IntegrationsConfig",
    "MatchingConfig",
    "PolicyConfig",
    "ScoringConfig"
]
