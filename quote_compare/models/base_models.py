#!/usr/bin/env python3
"""
Base Pydantic models for BOQ and vendor quotation line items.
These are the normalized shapes produced by the ingestion layer and consumed by the matchers.
"""

import logging
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode='json')


class BOQItem(CamelModel):
    """UI-facing BOQ row, the canonical target of fuzzy matching"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    item_number: str = ""
    description: str
    unit: str = ""
    quantity: float = 0
    base_rate: Optional[float] = None
    section: Optional[str] = None


class QuotationItem(CamelModel):
    """UI-facing vendor quotation row"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    vendor: str
    description: str
    unit: str = ""
    rate: float
    quantity: Optional[float] = None


class BOQLineItem(CamelModel):
    """SKU-keyed BOQ line used by the exact-key matcher"""
    line_no: int
    sku: str
    description: str = ""
    spec: Optional[str] = None
    qty: float = 0
    uom: Optional[str] = None
    estimated_price: float = 0
    total_estimate: Optional[float] = None


class QuoteLineItem(CamelModel):
    """SKU-keyed vendor quote line"""
    boq_line_no: Optional[int] = None
    sku: str
    unit_price: float = 0
    qty: float = 0
    min_qty: Optional[float] = None
    lead_time: Optional[int] = None
    tax: Optional[float] = None
    line_total: Optional[float] = None


def _tolerate_items(value, owner: str):
    # Anything that is not a list is treated as a missing items collection
    if value is None or isinstance(value, list):
        return value
    logger.warning(f"{owner} items is {type(value).__name__}, not a list - ignoring")
    return None


class BOQ(CamelModel):
    """Bill of Quantities as delivered by the parsing layer"""
    id: Optional[str] = None
    version: Optional[str] = None
    currency: Optional[str] = None
    items: Optional[List[BOQLineItem]] = None
    total_boq: float = Field(0, alias='totalBOQ')

    @field_validator('items', mode='before')
    @classmethod
    def validate_items(cls, v):
        return _tolerate_items(v, 'BOQ')


class Quote(CamelModel):
    """A single vendor's quotation"""
    id: Optional[str] = None
    vendor_id: str
    vendor_name: str
    currency: Optional[str] = None
    items: Optional[List[QuoteLineItem]] = None
    shipping_cost: float = 0
    discount_percent: float = 0
    total_cost: float = 0
    payment_terms: Optional[str] = None
    warranty: Optional[str] = None

    @field_validator('items', mode='before')
    @classmethod
    def validate_items(cls, v):
        return _tolerate_items(v, 'Quote')

    @field_validator('total_cost', mode='before')
    @classmethod
    def validate_total_cost(cls, v):
        return 0 if v is None else v


class MatchAlternative(CamelModel):
    """Runner-up BOQ candidate for a quotation row"""
    boq_id: str
    label: str
    score: float


class MatchResult(CamelModel):
    """Fuzzy matching result for one quotation row"""
    quote: QuotationItem
    matched_boq_id: Optional[str] = None
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    alternatives: List[MatchAlternative] = []
    manual: bool = False


class Selection(CamelModel):
    """Chosen vendor and rate for a BOQ item"""
    boq_item_id: str
    selected_vendor: str
    final_rate: float
