"""
QuoteCompare services
"""

from .approval_service import ApprovalService
from .comparison_service import ComparisonService
from .comparison_store import ComparisonStore
from .erp_service import ErpService
from .metrics_store import MetricsStore
from .notification_service import NotificationService
from .orchestrate_client import OrchestrateClient
from .policy_engine import PolicyEngine
from .vendor_scorer import VendorScorer

__all__ = [
    'ApprovalService',
    'ComparisonService',
    'ComparisonStore',
    'ErpService',
    'MetricsStore',
    'NotificationService',
    'OrchestrateClient',
    'PolicyEngine',
    'VendorScorer'
]
