#!/usr/bin/env python3
"""
Vendor selections per BOQ item, derived from fuzzy matches.
"""

from typing import Dict, List

from quote_compare.models import BOQItem, MatchResult, Selection


def vendor_rates(matches: List[MatchResult]) -> Dict[str, Dict[str, float]]:
    """BOQ item id -> vendor -> lowest rate that vendor quoted for it"""
    rates: Dict[str, Dict[str, float]] = {}
    for match in matches:
        if not match.matched_boq_id:
            continue
        vendor_map = rates.setdefault(match.matched_boq_id, {})
        existing = vendor_map.get(match.quote.vendor)
        if existing is None or match.quote.rate < existing:
            vendor_map[match.quote.vendor] = match.quote.rate
    return rates


def default_selections(boq_items: List[BOQItem], matches: List[MatchResult]) -> List[Selection]:
    """Pick the cheapest vendor for every BOQ item that has at least one match"""
    rates = vendor_rates(matches)
    selections = []
    for item in boq_items:
        item_rates = rates.get(item.id)
        if not item_rates:
            continue
        # min() keeps the first vendor seen on equal rates
        vendor = min(item_rates, key=item_rates.get)
        selections.append(Selection(boq_item_id=item.id, selected_vendor=vendor, final_rate=item_rates[vendor]))
    return selections


def select_vendor(selections: List[Selection], boq_item_id: str, vendor: str, rate: float) -> List[Selection]:
    """Replace (or add) the selection for one BOQ item"""
    chosen = Selection(boq_item_id=boq_item_id, selected_vendor=vendor, final_rate=rate)
    updated = [chosen if s.boq_item_id == boq_item_id else s for s in selections]
    if not any(s.boq_item_id == boq_item_id for s in selections):
        updated.append(chosen)
    return updated


def project_total(boq_items: List[BOQItem], selections: List[Selection]) -> float:
    quantities = {item.id: item.quantity for item in boq_items}
    return sum(
        quantities[s.boq_item_id] * s.final_rate
        for s in selections
        if s.boq_item_id in quantities
    )


def base_total(boq_items: List[BOQItem]) -> float:
    return sum(item.base_rate * item.quantity for item in boq_items if item.base_rate)


def coverage(boq_items: List[BOQItem], matches: List[MatchResult]) -> int:
    """Percentage of BOQ items with at least one matched quotation row"""
    if not boq_items:
        return 0
    matched_ids = {m.matched_boq_id for m in matches if m.matched_boq_id}
    covered = sum(1 for item in boq_items if item.id in matched_ids)
    return round(covered / len(boq_items) * 100)
