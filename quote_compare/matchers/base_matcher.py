#!/usr/bin/env python3
"""
Base matcher class that defines the interface for quote-to-BOQ match providers.
This provides the shared text normalization used by all matchers.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List

from quote_compare.models import BOQItem, MatchResult, QuotationItem


class MatchProvider(ABC):
    """Abstract base class for quote-to-BOQ match providers"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def match(self, boq_items: List[BOQItem], quote_items: List[QuotationItem]) -> List[MatchResult]:
        """Return exactly one MatchResult per quote item, in quote order"""
        pass

    def _normalize_text(self, text: Any) -> str:
        """Normalize text by handling special characters and quotes"""
        if text is None:
            return ""

        # Convert to string and strip whitespace
        normalized = str(text).strip()

        # Normalize typographic quotation marks to plain quotes
        quote_replacements = {
            '“': '"',  # Left double quotation mark
            '”': '"',  # Right double quotation mark
            '‘': "'",  # Left single quotation mark
            '’': "'",  # Right single quotation mark
            '`': "'",       # Backtick to apostrophe
            '´': "'",  # Acute accent to apostrophe
        }

        for old_quote, new_quote in quote_replacements.items():
            normalized = normalized.replace(old_quote, new_quote)

        # Remove extra whitespace between words
        normalized = ' '.join(normalized.split())

        return normalized.lower()
