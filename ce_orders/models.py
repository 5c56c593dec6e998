"""
models.py — Order and seller-payout records, enums, and field normalisation.

Every defaulting rule for user-supplied fields lives here. The order form,
the CSV importer and the persistence layer all go through build_order /
build_earning / order_from_dict so that a record is always well-formed.
"""

import math
import uuid
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta, timezone

import pandas as pd

# ── Business constants ───────────────────────────────────────────────────────
BUSINESS_TZ = timezone(timedelta(hours=5, minutes=30), "IST")

ORDER_SOURCES = ("Whatsapp", "Website")
DEFAULT_SOURCE = "Website"

PG_RATES = {
    "None": 0.0,
    "PhonePe": 0.0218,
    "Cashfree": 0.018,
}
DEFAULT_PG = "None"

EARNING_STATUSES = ("Paid", "Unpaid")

DEFAULT_PLATFORM_FEE = 10
MAX_PLATFORM_FEE = 20

UNCATEGORIZED = "Uncategorized"
DEFAULT_SELLER = "Direct"
UNTITLED_ORDER = "UNTITLED"
GUEST_CUSTOMER = "GUEST"

_TRUE_STRINGS = {"yes", "true", "1", "on", "y"}


@dataclass
class OrderRecord:
    """One confirmed or potential sale, raw inputs plus frozen derived amounts."""
    id: str
    order_date: datetime
    order_number: str = UNTITLED_ORDER
    customer_name: str = GUEST_CUSTOMER
    email: str = ""
    mobile_number: str = ""
    seller_name: str = DEFAULT_SELLER
    order_amount: float = 0.0
    discount_given: float = 0.0
    wallet_amount: float = 0.0
    referral_amount: float = 0.0
    is_gst_applied: bool = False
    apply_seller_share: bool = False
    platform_fee_percent: int = DEFAULT_PLATFORM_FEE
    order_source: str = DEFAULT_SOURCE
    category: str = UNCATEGORIZED
    pg_name: str = DEFAULT_PG
    pg_rate: float = 0.0
    is_potential: bool = False
    # derived
    gst_amount: float = 0.0
    total_amount_paid: float = 0.0
    commission_amount: float = 0.0
    seller_income: float = 0.0

    def raw_fields(self):
        """User-editable fields only (everything except id and derived amounts)."""
        data = asdict(self)
        for name in ("id",) + DERIVED_FIELDS:
            data.pop(name)
        return data

    def to_dict(self):
        data = asdict(self)
        data["order_date"] = format_local(self.order_date)
        return data


@dataclass
class SellerEarningRecord:
    """One payout owed to (or already paid to) a seller."""
    id: str
    seller_name: str
    payout_amount: float = 0.0
    status: str = "Unpaid"
    date: datetime = None
    notes: str = ""

    def to_dict(self):
        data = asdict(self)
        data["date"] = format_local(self.date)
        return data


DERIVED_FIELDS = ("gst_amount", "total_amount_paid", "commission_amount", "seller_income")


# ══════════════════════════════════════════════════════════════════════════════
#  FIELD PARSERS
# ══════════════════════════════════════════════════════════════════════════════

def new_id():
    return uuid.uuid4().hex


def now_local():
    return datetime.now(BUSINESS_TZ)


def parse_amount(val):
    """Parse a money value; blank, unparsable and non-finite values become 0.0."""
    if val is None or isinstance(val, bool):
        return 0.0
    if isinstance(val, str):
        val = val.replace("₹", "").replace(",", "").replace('"', "").strip()
        if val in ("", "--"):
            return 0.0
    try:
        num = float(val)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(num):
        return 0.0
    return num


def clamp_amount(val):
    return max(0.0, parse_amount(val))


def parse_fee_percent(val):
    if val is None or (isinstance(val, str) and not val.strip()):
        return DEFAULT_PLATFORM_FEE
    pct = int(round(parse_amount(val)))
    return min(MAX_PLATFORM_FEE, max(0, pct))


def parse_bool(val):
    if isinstance(val, str):
        return val.strip().lower() in _TRUE_STRINGS
    return bool(val)


def parse_text(val, default=""):
    if val is None:
        return default
    text = str(val).strip()
    return text or default


def to_local(dt):
    """Return *dt* as an aware datetime in the business timezone (naive = local)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=BUSINESS_TZ)
    return dt.astimezone(BUSINESS_TZ)


def parse_datetime(val, default=None):
    """Parse a timestamp in business-local time; *default* when blank or unparsable."""
    if isinstance(val, datetime):
        return to_local(val)
    text = parse_text(val)
    if not text:
        return default
    try:
        return to_local(datetime.fromisoformat(text))
    except ValueError:
        pass
    ts = pd.to_datetime(text, errors="coerce", dayfirst=False)
    if pd.isna(ts):
        return default
    return to_local(ts.to_pydatetime())


def format_local(dt):
    """ISO text in business-local time without offset, e.g. 2026-10-18T14:30:00."""
    if dt is None:
        return ""
    return to_local(dt).replace(tzinfo=None).isoformat(timespec="seconds")


def normalize_source(val):
    text = parse_text(val)
    for source in ORDER_SOURCES:
        if text.lower() == source.lower():
            return source
    return DEFAULT_SOURCE


def normalize_pg(val):
    text = parse_text(val)
    for name in PG_RATES:
        if text.lower() == name.lower():
            return name
    return DEFAULT_PG


def pg_rate_for(pg_name):
    return PG_RATES[normalize_pg(pg_name)]


def normalize_status(val):
    return "Paid" if parse_text(val).lower() == "paid" else "Unpaid"


# ══════════════════════════════════════════════════════════════════════════════
#  RECORD BUILDERS
# ══════════════════════════════════════════════════════════════════════════════

def _get(raw, name, default=None):
    if isinstance(raw, dict):
        return raw.get(name, default)
    return getattr(raw, name, default)


def build_order(raw, *, record_id=None, now=None):
    """Normalise raw form input into an OrderRecord with derived amounts filled in.

    *raw* may be a dict or an existing OrderRecord. Derived amounts are always
    recomputed, so a record built here is never stale.
    """
    from ce_orders.finance import derive

    now = now or now_local()
    pg_name = normalize_pg(_get(raw, "pg_name"))
    record = OrderRecord(
        id=record_id or parse_text(_get(raw, "id")) or new_id(),
        order_date=parse_datetime(_get(raw, "order_date"), default=to_local(now)),
        order_number=parse_text(_get(raw, "order_number"), UNTITLED_ORDER),
        customer_name=parse_text(_get(raw, "customer_name"), GUEST_CUSTOMER),
        email=parse_text(_get(raw, "email")),
        mobile_number=parse_text(_get(raw, "mobile_number")),
        seller_name=parse_text(_get(raw, "seller_name"), DEFAULT_SELLER),
        order_amount=clamp_amount(_get(raw, "order_amount")),
        discount_given=clamp_amount(_get(raw, "discount_given")),
        wallet_amount=clamp_amount(_get(raw, "wallet_amount")),
        referral_amount=clamp_amount(_get(raw, "referral_amount")),
        is_gst_applied=parse_bool(_get(raw, "is_gst_applied", False)),
        apply_seller_share=parse_bool(_get(raw, "apply_seller_share", False)),
        platform_fee_percent=parse_fee_percent(_get(raw, "platform_fee_percent")),
        order_source=normalize_source(_get(raw, "order_source")),
        category=parse_text(_get(raw, "category"), UNCATEGORIZED),
        pg_name=pg_name,
        pg_rate=pg_rate_for(pg_name),
        is_potential=parse_bool(_get(raw, "is_potential", False)),
    )
    derived = derive(record)
    record.gst_amount = derived.gst_amount
    record.total_amount_paid = derived.total_amount_paid
    record.commission_amount = derived.commission_amount
    record.seller_income = derived.seller_income
    return record


def build_earning(raw, *, record_id=None, now=None):
    """Normalise raw payout input into a SellerEarningRecord."""
    now = now or now_local()
    return SellerEarningRecord(
        id=record_id or parse_text(_get(raw, "id")) or new_id(),
        seller_name=parse_text(_get(raw, "seller_name")),
        payout_amount=clamp_amount(_get(raw, "payout_amount")),
        status=normalize_status(_get(raw, "status")),
        date=parse_datetime(_get(raw, "date"), default=to_local(now)),
        notes=parse_text(_get(raw, "notes")),
    )


def order_from_dict(data, now=None):
    """Rebuild an OrderRecord from its persisted dict without re-deriving.

    Stored derived amounts are kept as-is: imported rows carry values that
    were never produced by the deriver and must survive a reload unchanged.
    """
    record = build_order(data, now=now)
    for name in DERIVED_FIELDS:
        if name in data:
            setattr(record, name, parse_amount(data[name]))
    return record


def earning_from_dict(data, now=None):
    return build_earning(data, now=now)
