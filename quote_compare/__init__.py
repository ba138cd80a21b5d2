"""
QuoteCompare - BOQ vendor quotation matching, scoring and approval routing.
"""

__version__ = "0.1.0"
