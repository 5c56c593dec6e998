"""Test models — field parsing and record normalisation."""
from datetime import datetime, timezone

import pytest

from ce_orders.models import (
    BUSINESS_TZ,
    build_earning,
    build_order,
    format_local,
    order_from_dict,
    parse_amount,
    parse_bool,
    parse_datetime,
    parse_fee_percent,
    pg_rate_for,
)


class TestParsers:

    @pytest.mark.parametrize("val,expected", [
        ("1,250.50", 1250.5),
        ("₹99", 99.0),
        ("", 0.0),
        ("--", 0.0),
        (None, 0.0),
        ("nan", 0.0),
        (True, 0.0),
        (7, 7.0),
    ])
    def test_parse_amount(self, val, expected):
        assert parse_amount(val) == expected

    @pytest.mark.parametrize("val,expected", [(None, 10), ("", 10), (-5, 0), (12.6, 13), (99, 20)])
    def test_parse_fee_percent(self, val, expected):
        assert parse_fee_percent(val) == expected

    def test_parse_bool(self):
        assert parse_bool("Yes") and parse_bool("true") and parse_bool(1)
        assert not parse_bool("No") and not parse_bool("") and not parse_bool(None)

    def test_naive_datetime_is_business_local(self):
        dt = parse_datetime("2026-10-14T10:00")
        assert dt == datetime(2026, 10, 14, 10, 0, tzinfo=BUSINESS_TZ)

    def test_aware_datetime_converted(self):
        dt = parse_datetime(datetime(2026, 10, 14, 0, 0, tzinfo=timezone.utc))
        assert format_local(dt) == "2026-10-14T05:30:00"

    def test_unparsable_datetime_uses_default(self, now):
        assert parse_datetime("not a date", default=now) == now

    def test_pg_rates(self):
        assert pg_rate_for("phonepe") == pytest.approx(0.0218)
        assert pg_rate_for("Cashfree") == pytest.approx(0.018)
        assert pg_rate_for("Razorpay") == 0.0


class TestBuilders:

    def test_negative_amounts_clamped(self, now):
        o = build_order({"order_amount": -100, "wallet_amount": -5}, now=now)
        assert o.order_amount == 0.0
        assert o.wallet_amount == 0.0

    def test_order_date_defaults_to_now(self, now):
        assert build_order({}, now=now).order_date == now

    def test_earning_defaults(self, now):
        e = build_earning({"seller_name": " Priya ", "status": "weird"}, now=now)
        assert e.seller_name == "Priya"
        assert e.status == "Unpaid"
        assert e.date == now

    def test_order_from_dict_keeps_stored_derived_values(self, now):
        data = build_order({"order_amount": 100}, now=now).to_dict()
        data["total_amount_paid"] = 55.5
        assert order_from_dict(data, now=now).total_amount_paid == 55.5

    def test_order_from_dict_without_derived_values(self, now):
        o = order_from_dict({"order_amount": 100, "is_gst_applied": True}, now=now)
        assert o.total_amount_paid == pytest.approx(118)
