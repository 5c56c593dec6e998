"""
data_state.py — Order ledger, categories and seller payouts, plus persistence.

This is the single source of truth for dashboard data. Pages and callbacks
call DataState methods; each mutating call updates the in-memory snapshot and
then writes the whole affected collection back through the key/value store.
"""

import json
import logging
import os
import sys
from dataclasses import replace

from ce_orders import analytics
from ce_orders.csv_codec import export_orders_csv, import_orders_csv
from ce_orders.models import (
    build_earning,
    build_order,
    earning_from_dict,
    new_id,
    now_local,
    order_from_dict,
    parse_text,
)

# ── Paths ────────────────────────────────────────────────────────────────────
# BASE_DIR points to the project root (parent of ce_orders/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from supabase_loader import CATEGORIES_KEY, EARNINGS_KEY, ORDERS_KEY, get_store

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ["reels bundle", "CE Prime", "Advertisement ON CE"]


# ══════════════════════════════════════════════════════════════════════════════
#  COLLECTIONS
# ══════════════════════════════════════════════════════════════════════════════

class LedgerStore:
    """Records keyed by id, newest first by insertion.

    Updates and deletes for an unknown id do nothing.
    """

    def __init__(self, records=None):
        self._records = list(records or [])

    def __len__(self):
        return len(self._records)

    def __contains__(self, record_id):
        return any(r.id == record_id for r in self._records)

    def list(self):
        return list(self._records)

    def get(self, record_id):
        for r in self._records:
            if r.id == record_id:
                return r
        return None

    def create(self, record):
        self._records.insert(0, record)
        return record

    def update(self, record):
        for i, r in enumerate(self._records):
            if r.id == record.id:
                self._records[i] = record
                return True
        return False

    def delete(self, record_id):
        before = len(self._records)
        self._records = [r for r in self._records if r.id != record_id]
        return len(self._records) != before

    def import_batch(self, records):
        self._records = list(records) + self._records
        return len(records)


class SellerPayoutLedger(LedgerStore):

    def mark_paid(self, record_id):
        record = self.get(record_id)
        if record is None:
            return False
        return self.update(replace(record, status="Paid"))


class CategorySet:
    """Append-only ordered set of category names (exact, case-sensitive match)."""

    def __init__(self, names=None):
        self._names = []
        for name in names or []:
            self.add(name)

    def __contains__(self, name):
        return name in self._names

    def list(self):
        return list(self._names)

    def add(self, name):
        name = parse_text(name)
        if not name or name in self._names:
            return False
        self._names.append(name)
        return True


class EditSession:
    """Which record (if any) a form is editing: Idle or Editing(id)."""

    def __init__(self):
        self.editing_id = None

    @property
    def is_editing(self):
        return self.editing_id is not None

    @property
    def state(self):
        return f"Editing({self.editing_id})" if self.is_editing else "Idle"

    def start_edit(self, record_id):
        self.editing_id = record_id

    def finish(self):
        self.editing_id = None

    cancel = finish


# ══════════════════════════════════════════════════════════════════════════════
#  SERIALISATION
# ══════════════════════════════════════════════════════════════════════════════

def _load_json_list(store, key):
    text = store.load(key)
    if not text:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring corrupt %s (%s)", key, e)
        return None
    if not isinstance(data, list):
        logger.warning("Ignoring %s: expected a list, got %s", key, type(data).__name__)
        return None
    return data


def _dump(records):
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


# ══════════════════════════════════════════════════════════════════════════════
#  DATA STATE
# ══════════════════════════════════════════════════════════════════════════════

class DataState:
    """The commands the dashboard uses to read and change order data."""

    def __init__(self, store):
        self.store = store
        self.orders = LedgerStore()
        self.categories = CategorySet(DEFAULT_CATEGORIES)
        self.earnings = SellerPayoutLedger()
        self.edit = EditSession()
        self.earning_edit = EditSession()
        self.reload()

    # ── Loading / saving ──────────────────────────────────────────────────

    def reload(self):
        """Re-read all three collections from the store."""
        now = now_local()
        orders = _load_json_list(self.store, ORDERS_KEY) or []
        self.orders = LedgerStore(
            order_from_dict(o, now=now) for o in orders if isinstance(o, dict)
        )
        names = _load_json_list(self.store, CATEGORIES_KEY)
        self.categories = CategorySet(DEFAULT_CATEGORIES if names is None else names)
        earnings = _load_json_list(self.store, EARNINGS_KEY) or []
        self.earnings = SellerPayoutLedger(
            earning_from_dict(e, now=now) for e in earnings if isinstance(e, dict)
        )
        self.edit.finish()
        self.earning_edit.finish()
        logger.info("Loaded %d orders, %d categories, %d payouts",
                    len(self.orders), len(self.categories.list()), len(self.earnings))
        return {
            "orders": len(self.orders),
            "categories": len(self.categories.list()),
            "earnings": len(self.earnings),
        }

    def _save(self, key, text):
        try:
            self.store.save(key, text)
        except Exception:
            logger.exception("Failed to save %s", key)
            raise

    def _save_orders(self):
        self._save(ORDERS_KEY, _dump(self.orders.list()))

    def _save_categories(self):
        self._save(CATEGORIES_KEY, json.dumps(self.categories.list(), ensure_ascii=False))

    def _save_earnings(self):
        self._save(EARNINGS_KEY, _dump(self.earnings.list()))

    # ── Orders ────────────────────────────────────────────────────────────

    def list_orders(self):
        return self.orders.list()

    def get_order(self, record_id):
        return self.orders.get(record_id)

    def _unused_id(self):
        record_id = new_id()
        while record_id in self.orders:
            record_id = new_id()
        return record_id

    def create_order(self, raw):
        """Build a new order from raw form fields (derived amounts computed) and prepend it."""
        record = build_order(raw, record_id=self._unused_id())
        self.orders.create(record)
        self._save_orders()
        return record

    def update_order(self, record):
        """Replace the order with the same id, re-deriving its amounts. Unknown ids are ignored."""
        record_id = getattr(record, "id", None) or (record.get("id") if isinstance(record, dict) else None)
        if not record_id or record_id not in self.orders:
            return None
        updated = build_order(record, record_id=record_id)
        self.orders.update(updated)
        self._save_orders()
        return updated

    def delete_order(self, record_id):
        if self.edit.editing_id == record_id:
            self.edit.finish()
        if self.orders.delete(record_id):
            self._save_orders()

    def import_orders(self, records):
        """Prepend already-decoded records (CSV import); derived amounts are kept as given."""
        records = list(records)
        if not records:
            return 0
        self.orders.import_batch(records)
        self._save_orders()
        return len(records)

    def import_csv(self, text):
        return self.import_orders(import_orders_csv(text))

    def export_csv(self):
        return export_orders_csv(self.orders.list())

    # ── Edit mode ─────────────────────────────────────────────────────────

    def start_edit(self, record_id):
        if record_id in self.orders:
            self.edit.start_edit(record_id)
        return self.edit.state

    def cancel_edit(self):
        self.edit.cancel()
        return self.edit.state

    def submit_order(self, raw):
        """Create a new order, or update the one being edited, then return to Idle."""
        editing_id = self.edit.editing_id
        self.edit.finish()
        if editing_id is not None and editing_id in self.orders:
            data = dict(raw)
            data["id"] = editing_id
            return self.update_order(data)
        return self.create_order(raw)

    # ── Categories ────────────────────────────────────────────────────────

    def list_categories(self):
        return self.categories.list()

    def add_category(self, name):
        if self.categories.add(name):
            self._save_categories()
            return True
        return False

    # ── Seller earnings ───────────────────────────────────────────────────

    def list_earnings(self):
        return self.earnings.list()

    def create_earning(self, raw):
        record_id = new_id()
        while record_id in self.earnings:
            record_id = new_id()
        record = build_earning(raw, record_id=record_id)
        self.earnings.create(record)
        self._save_earnings()
        return record

    def update_earning(self, record):
        record_id = getattr(record, "id", None) or (record.get("id") if isinstance(record, dict) else None)
        if not record_id or record_id not in self.earnings:
            return None
        updated = build_earning(record, record_id=record_id)
        self.earnings.update(updated)
        self._save_earnings()
        return updated

    def delete_earning(self, record_id):
        if self.earning_edit.editing_id == record_id:
            self.earning_edit.finish()
        if self.earnings.delete(record_id):
            self._save_earnings()

    def mark_paid(self, record_id):
        if self.earnings.mark_paid(record_id):
            self._save_earnings()

    def get_earning(self, record_id):
        return self.earnings.get(record_id)

    def start_earning_edit(self, record_id):
        if record_id in self.earnings:
            self.earning_edit.start_edit(record_id)
        return self.earning_edit.state

    def cancel_earning_edit(self):
        self.earning_edit.cancel()
        return self.earning_edit.state

    def submit_earning(self, raw):
        """Create a payout, or update the one being edited, then return to Idle."""
        editing_id = self.earning_edit.editing_id
        self.earning_edit.finish()
        if editing_id is not None and editing_id in self.earnings:
            data = dict(raw)
            data["id"] = editing_id
            return self.update_earning(data)
        return self.create_earning(raw)

    # ── Analytics ─────────────────────────────────────────────────────────

    def compute_stats(self, period="all", source_filter="all", potential_filter="all", now=None):
        return analytics.compute_stats(self.orders.list(), period, source_filter, potential_filter, now)

    def compute_earning_stats(self):
        return analytics.compute_earning_stats(self.earnings.list())


# ── Process-wide state (one dashboard session) ──────────────────────────────

_STATE = None


def get_state():
    global _STATE
    if _STATE is None:
        _STATE = DataState(get_store())
    return _STATE


def set_state(state):
    global _STATE
    _STATE = state
    return state


def reload_state():
    return get_state().reload()
