"""
finance.py — Per-order money derivation.

derive() turns the raw inputs of one order into its GST, the cash the
customer actually paid, the platform commission and the seller's income.
It is pure and total: bad numbers are treated as 0 and every result is
clamped so nothing goes negative.
"""

from dataclasses import dataclass

import numpy as np

from ce_orders.models import _get, parse_amount, parse_bool, parse_fee_percent

GST_RATE = 0.18
EPSILON = 1e-6


@dataclass(frozen=True)
class DerivedAmounts:
    gst_amount: float
    total_amount_paid: float
    commission_amount: float
    seller_income: float


def net_base(raw):
    """Order amount minus discount, never below zero. Basis for GST and the seller split."""
    amount = max(0.0, parse_amount(_get(raw, "order_amount")))
    discount = max(0.0, parse_amount(_get(raw, "discount_given")))
    return max(0.0, amount - discount)


def derive(raw):
    """Compute the derived amounts for one order.

    The discount comes off before GST and before the seller split. Wallet
    credit only reduces what the customer pays in cash. Referral payouts are
    not touched here; they are a platform cost applied in the analytics.
    """
    base = net_base(raw)
    wallet = max(0.0, parse_amount(_get(raw, "wallet_amount")))

    gst = base * GST_RATE if parse_bool(_get(raw, "is_gst_applied", False)) else 0.0
    total_paid = max(0.0, (base - wallet) + gst)

    if parse_bool(_get(raw, "apply_seller_share", False)):
        fee_pct = parse_fee_percent(_get(raw, "platform_fee_percent"))
        commission = base * (fee_pct / 100)
        seller_income = max(0.0, base - commission)
    else:
        commission = base
        seller_income = 0.0

    return DerivedAmounts(
        gst_amount=gst,
        total_amount_paid=total_paid,
        commission_amount=commission,
        seller_income=seller_income,
    )


def money_equal(a, b, eps=EPSILON):
    return bool(np.isclose(a, b, rtol=0.0, atol=eps))


def money(val):
    """Format a number as ₹X,XXX.XX (display only)."""
    if val < 0:
        return f"-₹{abs(val):,.2f}"
    return f"₹{val:,.2f}"
