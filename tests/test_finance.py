"""Test finance — per-order money derivation."""
import pytest

from ce_orders.finance import EPSILON, GST_RATE, derive, money, money_equal, net_base


# ===================================================================
# derive()
# ===================================================================

class TestDerive:

    def test_gst_and_wallet(self):
        raw = {"order_amount": 1000, "discount_given": 100, "is_gst_applied": True,
               "wallet_amount": 50}
        d = derive(raw)
        assert net_base(raw) == pytest.approx(900)
        assert d.gst_amount == pytest.approx(162.0)
        assert d.total_amount_paid == pytest.approx(1012.0)

    def test_no_share_gives_platform_everything(self):
        d = derive({"order_amount": 1000, "discount_given": 100})
        assert d.commission_amount == pytest.approx(900)
        assert d.seller_income == 0.0

    def test_seller_share_split(self):
        raw = {"order_amount": 1000, "discount_given": 100, "is_gst_applied": True,
               "wallet_amount": 50, "apply_seller_share": True, "platform_fee_percent": 10}
        d = derive(raw)
        assert d.commission_amount == pytest.approx(90.0)
        assert d.seller_income == pytest.approx(810.0)
        assert abs(d.commission_amount + d.seller_income - net_base(raw)) < EPSILON

    def test_gst_off(self):
        d = derive({"order_amount": 400, "is_gst_applied": False})
        assert d.gst_amount == 0.0
        assert d.total_amount_paid == pytest.approx(400)

    def test_wallet_does_not_reduce_gst_base(self):
        d = derive({"order_amount": 100, "wallet_amount": 100, "is_gst_applied": True})
        assert d.gst_amount == pytest.approx(100 * GST_RATE)
        assert d.total_amount_paid == pytest.approx(18.0)

    def test_referral_not_subtracted(self):
        with_ref = derive({"order_amount": 500, "referral_amount": 75})
        without = derive({"order_amount": 500})
        assert with_ref == without

    def test_fee_clamped_to_twenty(self):
        d = derive({"order_amount": 100, "apply_seller_share": True, "platform_fee_percent": 55})
        assert d.commission_amount == pytest.approx(20.0)
        assert d.seller_income == pytest.approx(80.0)


class TestDeriveClamping:

    @pytest.mark.parametrize("raw", [
        {"order_amount": 100, "discount_given": 500},
        {"order_amount": 100, "wallet_amount": 10_000, "is_gst_applied": True},
        {"order_amount": -50, "apply_seller_share": True, "platform_fee_percent": 10},
        {"order_amount": "abc", "discount_given": None, "wallet_amount": "--"},
        {"order_amount": float("nan"), "wallet_amount": float("inf")},
        {},
    ])
    def test_results_never_negative(self, raw):
        d = derive(raw)
        assert d.total_amount_paid >= 0
        assert d.seller_income >= 0
        assert d.commission_amount >= 0
        assert d.gst_amount >= 0

    def test_discount_larger_than_order(self):
        d = derive({"order_amount": 100, "discount_given": 500, "is_gst_applied": True})
        assert d == derive({})

    def test_string_amounts_are_parsed(self):
        d = derive({"order_amount": "₹1,000", "discount_given": "100"})
        assert d.commission_amount == pytest.approx(900)

    def test_accepts_record_objects(self, sample_orders):
        o = sample_orders[1]
        d = derive(o)
        assert d.total_amount_paid == pytest.approx(o.total_amount_paid)


# ===================================================================
# Formatting / comparisons
# ===================================================================

class TestMoney:

    def test_format(self):
        assert money(1234567.891) == "₹1,234,567.89"
        assert money(0) == "₹0.00"

    def test_negative(self):
        assert money(-42.5) == "-₹42.50"

    def test_money_equal_tolerance(self):
        assert money_equal(0.1 + 0.2, 0.3)
        assert not money_equal(1.0, 1.001)
