"""
Quote-to-BOQ matchers
"""

from .base_matcher import MatchProvider
from .exact_key_matcher import ExactKeyMatcher, ExactMatchOutcome
from .similarity_matcher import SimilarityMatcher, apply_manual_match

__all__ = [
    'MatchProvider',
    'ExactKeyMatcher',
    'ExactMatchOutcome',
    'SimilarityMatcher',
    'apply_manual_match'
]
