#!/usr/bin/env python3
"""
Domain exceptions raised by QuoteCompare services and mapped to HTTP errors by the backend.
"""


class QuoteCompareError(Exception):
    """Base error for the comparison workflow"""
    status_code = 500
    code = "INTERNAL_ERROR"


class ComparisonNotFoundError(QuoteCompareError):
    status_code = 404
    code = "COMPARISON_NOT_FOUND"

    def __init__(self, comparison_id: str):
        super().__init__(f"Comparison not found: {comparison_id}")
        self.comparison_id = comparison_id


class InvalidStateError(QuoteCompareError):
    status_code = 409
    code = "INVALID_STATE"
