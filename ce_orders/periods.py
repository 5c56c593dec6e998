"""
periods.py — Time-window, channel and status filters for the analytics page.

All day/week/month boundaries are computed in the business timezone
(UTC+05:30) no matter what the host clock is set to.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ce_orders.models import BUSINESS_TZ, ORDER_SOURCES, parse_datetime, to_local

PERIODS = ("all", "today", "yesterday", "thisWeek", "thisMonth", "lastMonth", "custom")
SOURCE_FILTERS = ("all",) + ORDER_SOURCES
POTENTIAL_FILTERS = ("all", "confirmed", "potential")

PERIOD_LABELS = {
    "all": "History",
    "today": "Today",
    "yesterday": "Yesterday",
    "thisWeek": "This Week",
    "thisMonth": "This Month",
    "lastMonth": "Last Month",
    "custom": "Custom",
}


@dataclass(frozen=True)
class PeriodSpec:
    kind: str = "all"
    start: date = None
    end: date = None

    @classmethod
    def coerce(cls, spec):
        if isinstance(spec, PeriodSpec):
            return spec
        if spec in PERIODS:
            return cls(kind=spec)
        return cls()


def _as_date(val):
    if val is None or val == "":
        return None
    if isinstance(val, datetime):
        return to_local(val).date()
    if isinstance(val, date):
        return val
    parsed = parse_datetime(val)
    return parsed.date() if parsed else None


def _midnight(day):
    return datetime.combine(day, time.min, tzinfo=BUSINESS_TZ)


def _always(_order_date):
    return True


def period_bounds(spec, now):
    """Return (start, end, end_inclusive) for *spec*, or None when nothing is filtered."""
    spec = PeriodSpec.coerce(spec)
    today = to_local(now).date()
    start_today = _midnight(today)

    if spec.kind == "today":
        return start_today, None, False
    if spec.kind == "yesterday":
        return start_today - timedelta(days=1), start_today, False
    if spec.kind == "thisWeek":
        return start_today - timedelta(days=today.weekday()), None, False
    if spec.kind == "thisMonth":
        return _midnight(today.replace(day=1)), None, False
    if spec.kind == "lastMonth":
        last_day = today.replace(day=1) - timedelta(days=1)
        end = datetime.combine(last_day, time(23, 59, 59), tzinfo=BUSINESS_TZ)
        return _midnight(last_day.replace(day=1)), end, True
    if spec.kind == "custom":
        start, end = _as_date(spec.start), _as_date(spec.end)
        if start is None or end is None:
            return None
        end_dt = datetime.combine(end, time(23, 59, 59, 999000), tzinfo=BUSINESS_TZ)
        return _midnight(start), end_dt, True
    return None


def period_predicate(spec, now):
    """Build includes(order_date) -> bool for one period.

    A custom range with a missing bound filters nothing.
    """
    bounds = period_bounds(spec, now)
    if bounds is None:
        return _always
    start, end, end_inclusive = bounds

    def includes(order_date):
        d = to_local(order_date)
        if d < start:
            return False
        if end is None:
            return True
        return d <= end if end_inclusive else d < end

    return includes


def source_predicate(source_filter):
    if source_filter not in ORDER_SOURCES:
        return lambda order: True
    return lambda order: order.order_source == source_filter


def potential_predicate(potential_filter):
    if potential_filter == "confirmed":
        return lambda order: not order.is_potential
    if potential_filter == "potential":
        return lambda order: bool(order.is_potential)
    return lambda order: True


def order_filter(period="all", source_filter="all", potential_filter="all", now=None):
    """Combine the period, source and potential filters into one order predicate."""
    now = now or datetime.now(BUSINESS_TZ)
    in_period = period_predicate(period, now)
    in_source = source_predicate(source_filter)
    in_status = potential_predicate(potential_filter)

    def matches(order):
        return in_period(order.order_date) and in_source(order) and in_status(order)

    return matches


def filter_orders(orders, period="all", source_filter="all", potential_filter="all", now=None):
    matches = order_filter(period, source_filter, potential_filter, now)
    return [o for o in orders if matches(o)]
