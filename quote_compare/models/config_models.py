#!/usr/bin/env python3
"""
Pydantic models for the QuoteCompare configuration system.
Every threshold used by matching, scoring, policy and integrations lives here.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional
from enum import Enum


class ConfigSection(str, Enum):
    """Enum for configuration sections"""
    MATCHING = "matching"
    SCORING = "scoring"
    POLICY = "policy"
    INTEGRATIONS = "integrations"


class ComplianceMode(str, Enum):
    BINARY = "binary"
    PROPORTIONAL = "proportional"


class MatchingConfig(BaseModel):
    """Fuzzy matching tunables"""
    distance_threshold: float = Field(0.4, ge=0.0, le=1.0, description="Max field distance that counts as a hit")
    description_weight: float = Field(0.8, gt=0.0, description="Weight of the description field")
    unit_weight: float = Field(0.2, ge=0.0, description="Weight of the unit field")
    max_alternatives: int = Field(3, ge=0, le=10, description="Number of runner-up candidates kept")
    high_confidence: float = Field(0.8, ge=0.0, le=1.0, description="Lower edge of the high band")
    medium_confidence: float = Field(0.5, ge=0.0, le=1.0, description="Lower edge of the medium band")

    @model_validator(mode='after')
    def validate_bands(self):
        if self.medium_confidence > self.high_confidence:
            raise ValueError("medium_confidence cannot exceed high_confidence")
        return self


class ScoringConfig(BaseModel):
    """Vendor scoring tunables"""
    outlier_variance_threshold: float = Field(30.0, ge=0.0, description="Line variance (%) above which a line is an outlier")
    full_compliance_score: float = Field(100.0, description="Compliance score when every line matched")
    partial_compliance_score: float = Field(80.0, description="Compliance score when any line is unmatched")
    compliance_mode: ComplianceMode = Field(ComplianceMode.BINARY, description="binary or proportional penalty")
    variance_weight: float = Field(0.5, ge=0.0, description="Points lost per percent of total variance")
    compliance_weight: float = Field(0.2, ge=0.0, description="Points gained per compliance point")
    recommended_threshold: float = Field(85.0, description="Score above which a vendor is RECOMMENDED")
    acceptable_threshold: float = Field(70.0, description="Score above which a vendor is ACCEPTABLE")
    default_delivery_days: int = Field(14, ge=0, description="Delivery days when a quote has no lead time")


class PolicyConfig(BaseModel):
    """Business rule and approval routing tunables"""
    three_quote_cost_threshold: float = Field(10000.0, ge=0.0, description="Cost above which three quotes are required")
    min_quote_count: int = Field(3, ge=1, description="Quotes required above the cost threshold")
    procurement_manager_limit: float = Field(50000.0, ge=0.0, description="Max cost a procurement manager may approve")
    finance_director_limit: float = Field(500000.0, ge=0.0, description="Max cost a finance director may approve")
    low_variance_warning: float = Field(-50.0, description="Variance (%) below which a low price warning is raised")
    high_variance_warning: float = Field(50.0, description="Variance (%) above which a high price warning is raised")
    preferred_vendors: List[str] = Field(
        default_factory=lambda: ["Best Supply Co.", "Quality Goods Inc.", "Trusted Partners Ltd."]
    )

    @model_validator(mode='after')
    def validate_tiers(self):
        if self.procurement_manager_limit > self.finance_director_limit:
            raise ValueError("procurement_manager_limit cannot exceed finance_director_limit")
        return self


class IntegrationsConfig(BaseModel):
    """Downstream collaborator settings"""
    slack_webhook_url: Optional[str] = None
    default_approver_email: str = "approver@company.com"
    po_prefix: str = Field("TEST", min_length=1)
    orchestrate_url: Optional[str] = None
    orchestrate_api_key: Optional[str] = None
    orchestrate_agent_id: Optional[str] = None
    request_timeout_seconds: float = Field(10.0, gt=0)
    flow_timeout_seconds: float = Field(300.0, gt=0)
    flow_poll_interval_seconds: float = Field(2.0, gt=0)

    @field_validator('po_prefix')
    def validate_po_prefix(cls, v):
        if not v.strip():
            raise ValueError("PO prefix cannot be empty")
        return v.strip().upper()


class AppConfig(BaseModel):
    """Complete QuoteCompare configuration"""
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    integrations: IntegrationsConfig = Field(default_factory=IntegrationsConfig)

    @classmethod
    def get_default_config(cls) -> 'AppConfig':
        """Get default configuration for every section"""
        return cls()


class ConfigUpdateRequest(BaseModel):
    """Request model for updating one configuration section"""
    section: ConfigSection = Field(..., description="Section to update")
    values: Dict[str, Any] = Field(..., description="Field values to overwrite")

    @field_validator('values')
    def validate_values(cls, v):
        if not v:
            raise ValueError("At least one value is required")
        return v


class ConfigInquiryResponse(BaseModel):
    """Response model for configuration inquiry"""
    success: bool
    configs: Optional[AppConfig] = None
    error: Optional[str] = None


class ConfigUpdateResponse(BaseModel):
    """Response model for configuration update"""
    success: bool
    message: str
    updated_section: Optional[str] = None
    error: Optional[str] = None
