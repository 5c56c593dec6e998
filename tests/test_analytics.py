"""Test analytics — order and payout reductions, search helpers."""
import math

import pytest

from ce_orders.analytics import (
    OrderStats,
    aggregate_orders,
    compute_earning_stats,
    compute_stats,
    filter_earnings,
    search_orders,
    search_stats,
)
from ce_orders.finance import EPSILON
from ce_orders.models import build_earning, build_order
from ce_orders.periods import PeriodSpec


# ===================================================================
# Order stats
# ===================================================================

class TestComputeStats:

    def test_totals(self, sample_orders, now):
        s = compute_stats(sample_orders, "all", "all", "all", now)
        assert s.total_orders == 3
        assert s.total_revenue == pytest.approx(1880.0)
        assert s.total_gst == pytest.approx(180.0)
        assert s.seller_income == pytest.approx(850.0)
        assert s.total_referrals == pytest.approx(50.0)
        assert s.total_pg_charges == pytest.approx(9.0)
        assert s.net_ce_profit == pytest.approx(791.0)
        assert s.whatsapp_revenue == pytest.approx(1180.0)
        assert s.website_revenue == pytest.approx(700.0)

    def test_avg_order_uses_amount_minus_discount(self, sample_orders, now):
        s = compute_stats(sample_orders, now=now)
        assert s.avg_order == pytest.approx((500 + 1000 + 300) / 3)

    def test_net_profit_identity(self, sample_orders, now):
        s = compute_stats(sample_orders, now=now)
        expected = (s.total_revenue - s.total_gst - s.total_pg_charges
                    - s.total_referrals - s.seller_income)
        assert abs(s.net_ce_profit - expected) < EPSILON

    def test_net_profit_may_be_negative(self, now):
        orders = [build_order({"order_amount": 100, "referral_amount": 500}, now=now)]
        s = compute_stats(orders, now=now)
        assert s.net_ce_profit == pytest.approx(-400.0)
        assert s.net_ce_profit == (s.total_revenue - s.total_gst - s.total_pg_charges
                                   - s.total_referrals - s.seller_income)

    def test_empty_set(self, now):
        s = compute_stats([], now=now)
        assert s == OrderStats()
        assert s.avg_order == 0
        assert s.category_share == []

    def test_filters_applied(self, sample_orders, now):
        s = compute_stats(sample_orders, "today", "all", "all", now)
        assert s.total_orders == 1
        assert s.total_revenue == pytest.approx(500.0)

    def test_custom_period_spec(self, sample_orders, now):
        spec = PeriodSpec("custom", start="2026-09-01", end="2026-09-30")
        s = compute_stats(sample_orders, spec, "all", "potential", now)
        assert s.total_orders == 1
        assert s.total_revenue == pytest.approx(200.0)

    def test_zero_revenue_has_no_nan(self, now):
        orders = [build_order({"order_amount": 0, "category": "Free"}, now=now)]
        s = compute_stats(orders, now=now)
        assert s.category_share[0].percent == 0.0
        assert not math.isnan(s.avg_order)


class TestCategoryShare:

    def test_sorted_by_value_desc(self, sample_orders, now):
        shares = compute_stats(sample_orders, now=now).category_share
        assert [c.name for c in shares] == ["CE Prime", "reels bundle", "Uncategorized"]
        assert shares[0].value == pytest.approx(1180.0)

    def test_sum_matches_revenue(self, sample_orders, now):
        s = compute_stats(sample_orders, now=now)
        assert abs(sum(c.value for c in s.category_share) - s.total_revenue) < EPSILON
        assert sum(c.percent for c in s.category_share) == pytest.approx(100.0)

    def test_ties_broken_by_name(self, now):
        orders = [
            build_order({"order_amount": 100, "category": "zeta"}, now=now),
            build_order({"order_amount": 100, "category": "Alpha"}, now=now),
            build_order({"order_amount": 100, "category": "beta"}, now=now),
        ]
        shares = compute_stats(orders, now=now).category_share
        assert [c.name for c in shares] == ["Alpha", "beta", "zeta"]

    def test_blank_category_grouped_as_uncategorized(self, sample_orders):
        sample_orders[0].category = "  "
        shares = aggregate_orders(sample_orders).category_share
        names = [c.name for c in shares]
        assert "Uncategorized" in names
        assert len(names) == 2


# ===================================================================
# Seller payouts
# ===================================================================

class TestEarningStats:

    def test_paid_and_unpaid(self):
        earnings = [
            build_earning({"seller_name": "Priya", "payout_amount": 500, "status": "Unpaid"}),
            build_earning({"seller_name": "Sameer", "payout_amount": 300, "status": "Paid"}),
        ]
        s = compute_earning_stats(earnings)
        assert s.total_sellers == 2
        assert s.unpaid_count == 1
        assert s.paid_count == 1
        assert s.unpaid_balance == pytest.approx(500)
        assert s.paid_balance == pytest.approx(300)
        assert s.total_payout == pytest.approx(800)

    def test_sellers_counted_case_insensitively(self):
        earnings = [
            build_earning({"seller_name": "Priya", "payout_amount": 100}),
            build_earning({"seller_name": "PRIYA", "payout_amount": 200}),
        ]
        assert compute_earning_stats(earnings).total_sellers == 1

    def test_empty(self):
        s = compute_earning_stats([])
        assert s.total_sellers == 0
        assert s.total_payout == 0


# ===================================================================
# Search
# ===================================================================

class TestSearch:

    def test_matches_customer_seller_and_number(self, sample_orders):
        assert [o.order_number for o in search_orders(sample_orders, "meera")] == ["A2"]
        assert [o.order_number for o in search_orders(sample_orders, "a3")] == ["A3"]
        assert len(search_orders(sample_orders, "direct")) == 3

    def test_blank_term_returns_everything(self, sample_orders):
        assert search_orders(sample_orders, "  ") == sample_orders
        assert search_stats(sample_orders, "") is None

    def test_search_stats(self, sample_orders):
        stats = search_stats(sample_orders, "ravi")
        assert stats.count == 1
        assert stats.revenue == pytest.approx(500)

    def test_filter_earnings(self):
        earnings = [
            build_earning({"seller_name": "Priya", "status": "Paid"}),
            build_earning({"seller_name": "Sameer", "status": "Unpaid"}),
        ]
        assert [e.seller_name for e in filter_earnings(earnings, "", "unpaid")] == ["Sameer"]
        assert [e.seller_name for e in filter_earnings(earnings, "pri", "all")] == ["Priya"]
        assert filter_earnings(earnings, "pri", "unpaid") == []
