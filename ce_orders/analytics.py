"""
analytics.py — Summary statistics over orders and seller payouts.

compute_stats() filters the ledger (periods.py) and reduces what is left into
revenue, tax, gateway charges, referral costs, seller income, the platform's
net profit and a revenue split by category. compute_earning_stats() does the
same job for the seller payout ledger. Everything here is a pure function of
its inputs.
"""

from dataclasses import dataclass, field

import pandas as pd

from ce_orders.models import UNCATEGORIZED
from ce_orders.periods import filter_orders

_ORDER_COLUMNS = [
    "order_amount", "discount_given", "total_amount_paid", "seller_income",
    "gst_amount", "referral_amount", "pg_rate", "order_source", "category",
]


@dataclass
class CategoryShare:
    name: str
    value: float
    percent: float


@dataclass
class OrderStats:
    total_orders: int = 0
    total_revenue: float = 0.0
    avg_order: float = 0.0
    seller_income: float = 0.0
    total_gst: float = 0.0
    total_referrals: float = 0.0
    total_pg_charges: float = 0.0
    net_ce_profit: float = 0.0
    whatsapp_revenue: float = 0.0
    website_revenue: float = 0.0
    category_share: list = field(default_factory=list)


@dataclass
class EarningStats:
    total_sellers: int = 0
    paid_count: int = 0
    unpaid_count: int = 0
    paid_balance: float = 0.0
    unpaid_balance: float = 0.0
    total_payout: float = 0.0


@dataclass
class SearchStats:
    count: int
    revenue: float


def _orders_frame(orders):
    rows = [{col: getattr(o, col) for col in _ORDER_COLUMNS} for o in orders]
    df = pd.DataFrame(rows, columns=_ORDER_COLUMNS)
    for col in _ORDER_COLUMNS[:7]:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0).astype(float)
    df["category"] = df["category"].fillna("").astype(str).str.strip()
    df.loc[df["category"] == "", "category"] = UNCATEGORIZED
    return df


def _category_share(df, total_revenue):
    if df.empty:
        return []
    grouped = (
        df.groupby("category", sort=False)["total_amount_paid"].sum()
        .reset_index()
        .rename(columns={"category": "name", "total_amount_paid": "value"})
        .sort_values(["value", "name"], ascending=[False, True], kind="mergesort")
    )
    shares = []
    for name, value in zip(grouped["name"], grouped["value"]):
        percent = (value / total_revenue * 100) if total_revenue else 0.0
        shares.append(CategoryShare(name=str(name), value=float(value), percent=float(percent)))
    return shares


def aggregate_orders(orders):
    """Reduce an already-filtered order sequence to OrderStats."""
    df = _orders_frame(orders)
    total_orders = len(df)
    if total_orders == 0:
        return OrderStats()

    total_revenue = float(df["total_amount_paid"].sum())
    # order value is measured before wallet and GST, not on collected cash
    gross_minus_discount = float((df["order_amount"] - df["discount_given"]).sum())
    avg_order = gross_minus_discount / total_orders

    seller_income = float(df["seller_income"].sum())
    total_gst = float(df["gst_amount"].sum())
    total_referrals = float(df["referral_amount"].sum())
    total_pg_charges = float((df["total_amount_paid"] * df["pg_rate"]).sum())
    net_ce_profit = total_revenue - total_gst - total_pg_charges - total_referrals - seller_income

    by_source = df.groupby("order_source")["total_amount_paid"].sum()

    return OrderStats(
        total_orders=total_orders,
        total_revenue=total_revenue,
        avg_order=avg_order,
        seller_income=seller_income,
        total_gst=total_gst,
        total_referrals=total_referrals,
        total_pg_charges=total_pg_charges,
        net_ce_profit=net_ce_profit,
        whatsapp_revenue=float(by_source.get("Whatsapp", 0.0)),
        website_revenue=float(by_source.get("Website", 0.0)),
        category_share=_category_share(df, total_revenue),
    )


def compute_stats(orders, period="all", source_filter="all", potential_filter="all", now=None):
    """Filter *orders* by period, channel and potential status, then aggregate."""
    return aggregate_orders(filter_orders(orders, period, source_filter, potential_filter, now))


def compute_earning_stats(earnings):
    """Seller payout totals; sellers are counted case-insensitively by name."""
    earnings = list(earnings)
    if not earnings:
        return EarningStats()
    df = pd.DataFrame({
        "seller": [e.seller_name or "" for e in earnings],
        "amount": [e.payout_amount for e in earnings],
        "status": [e.status for e in earnings],
    })
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0)
    paid = df[df["status"] == "Paid"]
    unpaid = df[df["status"] == "Unpaid"]
    paid_balance = float(paid["amount"].sum())
    unpaid_balance = float(unpaid["amount"].sum())
    return EarningStats(
        total_sellers=int(df["seller"].str.lower().nunique()),
        paid_count=len(paid),
        unpaid_count=len(unpaid),
        paid_balance=paid_balance,
        unpaid_balance=unpaid_balance,
        total_payout=paid_balance + unpaid_balance,
    )


# ── Search (orders list / seller list) ───────────────────────────────────────

def search_orders(orders, term):
    term = (term or "").strip().lower()
    if not term:
        return list(orders)
    return [
        o for o in orders
        if term in (o.customer_name or "").lower()
        or term in (o.seller_name or "").lower()
        or term in (o.order_number or "").lower()
    ]


def search_stats(orders, term):
    """Count and collected revenue of the orders matching *term*; None when not searching."""
    if not (term or "").strip():
        return None
    matched = search_orders(orders, term)
    return SearchStats(count=len(matched), revenue=sum(o.total_amount_paid for o in matched))


def filter_earnings(earnings, term="", status_filter="all"):
    term = (term or "").strip().lower()
    result = []
    for e in earnings:
        if term and term not in (e.seller_name or "").lower():
            continue
        if status_filter == "paid" and e.status != "Paid":
            continue
        if status_filter == "unpaid" and e.status != "Unpaid":
            continue
        result.append(e)
    return result
