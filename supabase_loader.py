"""
supabase_loader.py — Key/value persistence for the order dashboard (with local-file fallback).

The dashboard keeps three JSON documents, each under its own key:
  ce_orders           — the order ledger
  ce_categories       — the category list
  ce_seller_earnings  — the seller payout ledger

Every store exposes the same two calls:
  load(key)        -> str | None
  save(key, text)  -> None
"""

import logging
import os
from pathlib import Path

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

ORDERS_KEY = "ce_orders"
CATEGORIES_KEY = "ce_categories"
EARNINGS_KEY = "ce_seller_earnings"
STATE_KEYS = (ORDERS_KEY, CATEGORIES_KEY, EARNINGS_KEY)

logger = logging.getLogger(__name__)


# ── Settings ────────────────────────────────────────────────────────────────

def _load_env():
    from dotenv import load_dotenv
    load_dotenv(os.path.join(BASE_DIR, ".env"))


def _state_table():
    return os.environ.get("CE_STATE_TABLE", "app_state")


def _data_dir():
    return Path(os.environ.get("CE_DATA_DIR", "") or os.path.join(BASE_DIR, "data"))


# ── Supabase helpers ────────────────────────────────────────────────────────

def _get_supabase_client():
    """Return a Supabase client, or None if credentials are missing."""
    _load_env()

    url = os.environ.get("SUPABASE_URL", "")
    key = os.environ.get("SUPABASE_KEY", "")
    if not url or not key or "YOUR_PROJECT" in url:
        return None

    from supabase import create_client
    return create_client(url, key)


class SupabaseStore:
    """One row per key in a two-column (key TEXT PRIMARY KEY, value TEXT) table."""

    def __init__(self, client, table="app_state"):
        self.client = client
        self.table = table

    def load(self, key):
        resp = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not resp.data:
            return None
        return resp.data[0]["value"]

    def save(self, key, text):
        self.client.table(self.table).upsert({"key": key, "value": text}).execute()

    def ping(self):
        """Cheap round-trip so a misconfigured project fails at startup, not on first save."""
        self.client.table(self.table).select("key").limit(1).execute()


# ── Local files (fallback) ─────────────────────────────────────────────────

class LocalFileStore:
    """Each key is a <key>.json file in *data_dir*; writes go through a temp file."""

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)

    def _path(self, key):
        return self.data_dir / f"{key}.json"

    def load(self, key):
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key, text):
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(path)


# ── Public API ──────────────────────────────────────────────────────────────

def get_store():
    """
    Pick the persistence backend.  Tries Supabase first; falls back to local files.

    Returns
    -------
    SupabaseStore or LocalFileStore
    """
    client = None
    try:
        client = _get_supabase_client()
    except Exception as e:
        logger.warning("Could not create Supabase client (%s)", e)

    if client is not None:
        store = SupabaseStore(client, table=_state_table())
        try:
            store.ping()
            logger.info("Using Supabase table %s", store.table)
            return store
        except Exception as e:
            logger.warning("Supabase unreachable (%s), falling back to local files", e)

    data_dir = _data_dir()
    logger.info("Using local files in %s", data_dir)
    return LocalFileStore(data_dir)
