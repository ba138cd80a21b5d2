#!/usr/bin/env python3
"""
Pydantic models for API requests and responses.
Request bodies are validated here before any matching or scoring runs.
"""

from pydantic import Field
from typing import Any, Dict, List, Optional

from .base_models import BOQ, BOQItem, CamelModel, MatchResult, QuotationItem, Quote, Selection
from .comparison_models import Decision


class CreateComparisonRequest(CamelModel):
    """Request model for POST /api/comparison"""
    boq_data: BOQ
    quotes: List[Quote]


class MatchRequest(CamelModel):
    """Request model for POST /api/match"""
    boq_items: List[BOQItem]
    quote_items: List[QuotationItem]


class MatchSummary(CamelModel):
    boq_item_count: int
    vendor_count: int
    coverage_percent: int
    project_total: float
    base_total: float
    savings: float


class MatchResponse(CamelModel):
    """Response payload for POST /api/match"""
    matches: List[MatchResult]
    selections: List[Selection]
    summary: MatchSummary


class OverrideMatchRequest(CamelModel):
    """Request model for POST /api/match/override"""
    match: MatchResult
    boq_id: str = Field(..., min_length=1)


class ApprovalRequest(CamelModel):
    """Request model for POST /api/approval"""
    comparison_id: str = Field(..., min_length=1)
    decision: Decision
    approver_role: Optional[str] = None
    approver_email: Optional[str] = None
    comment: Optional[str] = None


class CreatePORequest(CamelModel):
    """Request model for POST /api/erp/create-po"""
    selected_vendor: str = Field(..., min_length=1)
    comparison_id: str = Field(..., min_length=1)
    po_data: Dict[str, Any] = {}


class ExportRequest(CamelModel):
    """Request model for POST /api/export"""
    boq_items: List[BOQItem]
    selections: List[Selection] = []
