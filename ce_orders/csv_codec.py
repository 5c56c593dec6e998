"""
csv_codec.py — Order ledger CSV export / import.

The 14-column layout below is an interchange format shared with spreadsheets
and older exports; header text and column order must not change.

Import deliberately does not run the deriver. GST and the paid total are
taken from their columns, GST is considered applied when the GST column is
positive, and the commission is set to the raw order amount. Raw amounts
are clamped at zero, the same as build_order does on reload.

A malformed line (unbalanced quote, oversized field) costs at most that one
row; the rows around it are still imported.
"""

import csv
import io
import logging
from contextlib import contextmanager

from ce_orders.models import (
    DEFAULT_PG,
    DEFAULT_PLATFORM_FEE,
    DEFAULT_SELLER,
    UNCATEGORIZED,
    OrderRecord,
    clamp_amount,
    format_local,
    new_id,
    normalize_source,
    now_local,
    parse_amount,
    parse_datetime,
    parse_text,
    to_local,
)

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Order Date", "Order Number", "Customer Name", "Email", "Mobile",
    "Order Amount", "Discount", "GST Amount", "Wallet Amount",
    "Referral Amount", "Total Paid", "Category", "Source", "Potential",
]


def _fmt_number(val):
    val = float(val)
    if val.is_integer():
        return str(int(val))
    return repr(val)


def _order_row(o):
    return [
        format_local(o.order_date),
        o.order_number,
        o.customer_name,
        o.email,
        o.mobile_number,
        _fmt_number(o.order_amount),
        _fmt_number(o.discount_given),
        _fmt_number(o.gst_amount),
        _fmt_number(o.wallet_amount),
        _fmt_number(o.referral_amount),
        _fmt_number(o.total_amount_paid),
        o.category,
        o.order_source,
        "Yes" if o.is_potential else "No",
    ]


def export_orders_csv(orders):
    """Serialise *orders* (in ledger order) to CSV text with standard quoting."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for o in orders:
        writer.writerow(_order_row(o))
    return buf.getvalue()


def export_filename(now=None):
    now = to_local(now or now_local())
    return f"ce_orders_{now.strftime('%Y-%m-%d')}.csv"


def _col(cols, idx):
    return cols[idx] if idx < len(cols) else ""


def _row_to_order(cols, now):
    order_amount = clamp_amount(_col(cols, 5))
    gst_amount = parse_amount(_col(cols, 7))
    return OrderRecord(
        id=new_id(),
        order_date=parse_datetime(_col(cols, 0), default=to_local(now)),
        order_number=parse_text(_col(cols, 1), "Imported"),
        customer_name=parse_text(_col(cols, 2), "Guest"),
        email=parse_text(_col(cols, 3)),
        mobile_number=parse_text(_col(cols, 4)),
        seller_name=DEFAULT_SELLER,
        order_amount=order_amount,
        discount_given=clamp_amount(_col(cols, 6)),
        wallet_amount=clamp_amount(_col(cols, 8)),
        referral_amount=clamp_amount(_col(cols, 9)),
        is_gst_applied=gst_amount > 0,
        apply_seller_share=False,
        platform_fee_percent=DEFAULT_PLATFORM_FEE,
        order_source=normalize_source(_col(cols, 12)),
        category=parse_text(_col(cols, 11), UNCATEGORIZED),
        pg_name=DEFAULT_PG,
        pg_rate=0.0,
        is_potential=_col(cols, 13).strip() == "Yes",
        gst_amount=gst_amount,
        total_amount_paid=parse_amount(_col(cols, 10)),
        commission_amount=order_amount,
        seller_income=0.0,
    )


class _LineFeed:
    """Physical-line iterator for csv.reader that remembers where the current record began."""

    def __init__(self, lines, start):
        self.lines = lines
        self.pos = start
        self.record_start = start

    def __iter__(self):
        return self

    def __next__(self):
        if self.pos >= len(self.lines):
            raise StopIteration
        line = self.lines[self.pos]
        self.pos += 1
        return line


@contextmanager
def _field_limit(size):
    previous = csv.field_size_limit()
    csv.field_size_limit(max(previous, size))
    try:
        yield
    finally:
        csv.field_size_limit(previous)


def _split_records(lines):
    """Tokenise *lines* into rows, recovering from malformed quoting.

    Quoted fields may span lines. A record that cannot be closed (an
    unbalanced quote, text after a closing quote) is re-read from its first
    physical line on its own, and reading resumes on the line after it.
    """
    rows = []
    start = 0
    while start < len(lines):
        feed = _LineFeed(lines, start)
        try:
            for cols in csv.reader(feed, strict=True):
                rows.append(cols)
                feed.record_start = feed.pos
            break
        except csv.Error as e:
            bad = feed.record_start
            logger.warning("CSV line %d is malformed (%s); reading it on its own", bad + 1, e)
            rows.append(next(csv.reader([lines[bad].rstrip("\r\n")]), []))
            start = bad + 1
    return rows


def import_orders_csv(text, now=None):
    """Parse exported CSV text back into new OrderRecords, file order preserved.

    The first row is the header. Blank rows are skipped and every other row
    yields a record, with missing or unparsable columns defaulted.
    """
    now = now or now_local()
    if isinstance(text, bytes):
        text = text.decode("utf-8-sig", errors="replace")
    text = text.lstrip("\ufeff").replace("\x00", "")

    lines = io.StringIO(text, newline="").readlines()
    with _field_limit(len(text) + 1):
        rows = _split_records(lines)

    orders = []
    for cols in rows[1:]:
        if not any(c.strip() for c in cols):
            continue
        orders.append(_row_to_order(cols, now))
    logger.info("Parsed %d order(s) from CSV", len(orders))
    return orders
