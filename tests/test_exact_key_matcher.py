"""
Unit tests for SKU-based matching and price variance.
"""

import pytest

from quote_compare.matchers import ExactKeyMatcher
from quote_compare.models import BOQLineItem, QuoteLineItem


@pytest.fixture
def matcher():
    return ExactKeyMatcher(outlier_threshold=30)


@pytest.fixture
def boq_lines():
    return [
        BOQLineItem(line_no=1, sku='SKU-A', description='Steel pipe 50mm', qty=10, estimated_price=100),
        BOQLineItem(line_no=2, sku='SKU-B', description='Gate valve 50mm', qty=20, estimated_price=50),
        BOQLineItem(line_no=3, sku='SKU-Z', description='Free issue item', qty=1, estimated_price=0),
    ]


@pytest.fixture
def quote_lines():
    return [
        QuoteLineItem(sku='SKU-B', unit_price=55, qty=20),
        QuoteLineItem(sku='sku-a', unit_price=100, qty=10),
        QuoteLineItem(sku='SKU-A', unit_price=150, qty=10),
        QuoteLineItem(sku='SKU-X', unit_price=12, qty=3),
    ]


@pytest.mark.unit
class TestPartition:

    def test_partition_is_total(self, matcher, boq_lines, quote_lines):
        outcome = matcher.match_items(boq_lines, quote_lines)

        assert len(outcome.matches) + len(outcome.unmatched) == len(quote_lines)

    def test_order_follows_quote_order(self, matcher, boq_lines, quote_lines):
        outcome = matcher.match_items(boq_lines, quote_lines)

        assert [m.sku for m in outcome.matches] == ['SKU-B', 'SKU-A']
        assert [u.sku for u in outcome.unmatched] == ['sku-a', 'SKU-X']

    def test_sku_comparison_is_case_sensitive(self, matcher, boq_lines):
        outcome = matcher.match_items(boq_lines, [QuoteLineItem(sku='sku-a', unit_price=1, qty=1)])

        assert outcome.matches == []
        assert outcome.unmatched[0].reason == 'SKU not in BOQ'
        assert outcome.unmatched[0].matched is False

    def test_matched_item_fields(self, matcher, boq_lines, quote_lines):
        match = matcher.match_items(boq_lines, quote_lines).matches[0]

        assert match.boq_line_no == 2
        assert match.description == 'Gate valve 50mm'
        assert match.boq_qty == 20
        assert match.boq_price == 50
        assert match.quote_qty == 20
        assert match.quote_price == 55
        assert match.matched is True

    def test_idempotent(self, matcher, boq_lines, quote_lines):
        first = matcher.match_items(boq_lines, quote_lines)
        second = matcher.match_items(boq_lines, quote_lines)

        assert first.matches == second.matches
        assert first.unmatched == second.unmatched

    def test_empty_inputs(self, matcher, boq_lines):
        outcome = matcher.match_items(boq_lines, [])

        assert outcome.matches == [] and outcome.unmatched == []

    def test_first_boq_line_wins_for_duplicate_sku(self, matcher):
        boq = [
            BOQLineItem(line_no=1, sku='DUP', estimated_price=10),
            BOQLineItem(line_no=2, sku='DUP', estimated_price=20),
        ]
        match = matcher.match_items(boq, [QuoteLineItem(sku='DUP', unit_price=10, qty=1)]).matches[0]

        assert match.boq_line_no == 1


@pytest.mark.unit
class TestVariance:

    def test_variance_formula(self, matcher, boq_lines, quote_lines):
        for match in matcher.match_items(boq_lines, quote_lines).matches:
            assert match.variance == (match.quote_price - match.boq_price) / match.boq_price * 100

    def test_outlier_flag(self, matcher, boq_lines, quote_lines):
        matches = matcher.match_items(boq_lines, quote_lines).matches

        assert matches[0].variance == pytest.approx(10.0)
        assert matches[0].is_outlier is False
        assert matches[0].outlier_reason is None

        assert matches[1].variance == pytest.approx(50.0)
        assert matches[1].is_outlier is True
        assert matches[1].outlier_reason == 'Price variance 50.00% exceeds 30% threshold'

    def test_negative_variance_outlier(self, matcher, boq_lines):
        match = matcher.match_items(boq_lines, [QuoteLineItem(sku='SKU-A', unit_price=60, qty=1)]).matches[0]

        assert match.variance == pytest.approx(-40.0)
        assert match.is_outlier is True

    def test_zero_boq_price_gives_zero_variance(self, matcher, boq_lines):
        match = matcher.match_items(boq_lines, [QuoteLineItem(sku='SKU-Z', unit_price=75, qty=1)]).matches[0]

        assert match.variance == 0
        assert match.is_outlier is False

    def test_outlier_threshold_is_configurable(self, boq_lines):
        matcher = ExactKeyMatcher(outlier_threshold=5)
        match = matcher.match_items(boq_lines, [QuoteLineItem(sku='SKU-B', unit_price=55, qty=1)]).matches[0]

        assert match.is_outlier is True

    def test_outlier_count(self, matcher, boq_lines, quote_lines):
        assert matcher.match_items(boq_lines, quote_lines).outlier_count == 1
