"""
Shared fixtures for the CE order dashboard test suite.

Provides an in-memory key/value store, a fixed "now" in business time and a
few sample orders, so that no test touches Supabase or the data/ folder.
"""

from datetime import datetime

import pytest

from ce_orders import data_state as ds
from ce_orders.models import BUSINESS_TZ, build_order


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------

class MemoryStore:
    """Dict-backed stand-in for SupabaseStore / LocalFileStore that records writes."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.saves = []

    def load(self, key):
        return self.data.get(key)

    def save(self, key, text):
        self.data[key] = text
        self.saves.append(key)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def state(memory_store):
    """A DataState installed as the process-wide state for the test."""
    previous = ds._STATE
    st = ds.set_state(ds.DataState(memory_store))
    yield st
    ds.set_state(previous)


# ---------------------------------------------------------------------------
# Time fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def now():
    """Wednesday 2026-10-14 15:30 in business time."""
    return datetime(2026, 10, 14, 15, 30, tzinfo=BUSINESS_TZ)


# ---------------------------------------------------------------------------
# Order fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def raw_order():
    return {
        "order_date": "2026-10-14T10:00",
        "order_number": "CE-1001",
        "customer_name": "Asha Verma",
        "email": "asha@example.com",
        "mobile_number": "9800000001",
        "order_amount": 1000,
        "discount_given": 100,
        "wallet_amount": 50,
        "referral_amount": 20,
        "is_gst_applied": True,
        "apply_seller_share": True,
        "platform_fee_percent": 10,
        "order_source": "Whatsapp",
        "category": "CE Prime",
        "pg_name": "PhonePe",
        "is_potential": False,
    }


@pytest.fixture
def sample_orders(now):
    """Three orders across both channels, one of them potential."""
    return [
        build_order({
            "order_date": "2026-10-14T09:00", "order_number": "A1", "customer_name": "Ravi",
            "order_amount": 500, "order_source": "Website", "category": "reels bundle",
            "pg_name": "Cashfree",
        }, now=now),
        build_order({
            "order_date": "2026-10-13T18:00", "order_number": "A2", "customer_name": "Meera",
            "order_amount": 1200, "discount_given": 200, "is_gst_applied": True,
            "apply_seller_share": True, "platform_fee_percent": 15,
            "order_source": "Whatsapp", "category": "CE Prime", "referral_amount": 50,
        }, now=now),
        build_order({
            "order_date": "2026-09-20T12:00", "order_number": "A3", "customer_name": "Kiran",
            "order_amount": 300, "wallet_amount": 100, "order_source": "Website",
            "category": "", "is_potential": True,
        }, now=now),
    ]
