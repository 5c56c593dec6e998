"""Test supabase_loader — Supabase key/value store and local-file fallback."""
from unittest.mock import MagicMock, patch

import pytest

import supabase_loader as sl


# ===================================================================
# Local files
# ===================================================================

class TestLocalFileStore:

    def test_missing_key(self, tmp_path):
        assert sl.LocalFileStore(tmp_path).load(sl.ORDERS_KEY) is None

    def test_save_then_load(self, tmp_path):
        store = sl.LocalFileStore(tmp_path / "nested")
        store.save(sl.ORDERS_KEY, '[{"id": "x"}]')
        assert store.load(sl.ORDERS_KEY) == '[{"id": "x"}]'
        assert (tmp_path / "nested" / "ce_orders.json").exists()
        assert not list((tmp_path / "nested").glob("*.tmp"))

    def test_overwrite(self, tmp_path):
        store = sl.LocalFileStore(tmp_path)
        store.save(sl.CATEGORIES_KEY, "[]")
        store.save(sl.CATEGORIES_KEY, '["a"]')
        assert store.load(sl.CATEGORIES_KEY) == '["a"]'


# ===================================================================
# Supabase
# ===================================================================

@pytest.fixture
def client():
    return MagicMock()


class TestSupabaseStore:

    def test_load_existing(self, client):
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[{"value": "[1]"}])
        store = sl.SupabaseStore(client, table="app_state")
        assert store.load(sl.ORDERS_KEY) == "[1]"
        client.table.assert_called_with("app_state")
        client.table.return_value.select.return_value.eq.assert_called_with("key", sl.ORDERS_KEY)

    def test_load_missing(self, client):
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[])
        assert sl.SupabaseStore(client).load(sl.ORDERS_KEY) is None

    def test_save_upserts(self, client):
        sl.SupabaseStore(client, table="t").save(sl.EARNINGS_KEY, "[]")
        client.table.return_value.upsert.assert_called_once_with(
            {"key": sl.EARNINGS_KEY, "value": "[]"})
        client.table.return_value.upsert.return_value.execute.assert_called_once()


# ===================================================================
# Backend selection
# ===================================================================

class TestGetStore:

    def test_no_credentials_uses_local_files(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CE_DATA_DIR", str(tmp_path))
        with patch.object(sl, "_get_supabase_client", return_value=None):
            store = sl.get_store()
        assert isinstance(store, sl.LocalFileStore)
        assert store.data_dir == tmp_path

    def test_supabase_when_reachable(self, client, monkeypatch):
        monkeypatch.setenv("CE_STATE_TABLE", "orders_state")
        with patch.object(sl, "_get_supabase_client", return_value=client):
            store = sl.get_store()
        assert isinstance(store, sl.SupabaseStore)
        assert store.table == "orders_state"

    def test_unreachable_supabase_falls_back(self, client, tmp_path, monkeypatch):
        monkeypatch.setenv("CE_DATA_DIR", str(tmp_path))
        client.table.side_effect = RuntimeError("connection refused")
        with patch.object(sl, "_get_supabase_client", return_value=client):
            store = sl.get_store()
        assert isinstance(store, sl.LocalFileStore)

    def test_client_error_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CE_DATA_DIR", str(tmp_path))
        with patch.object(sl, "_get_supabase_client", side_effect=ValueError("bad url")):
            store = sl.get_store()
        assert isinstance(store, sl.LocalFileStore)

    def test_placeholder_url_means_no_client(self, monkeypatch):
        monkeypatch.setattr(sl, "_load_env", lambda: None)
        monkeypatch.setenv("SUPABASE_URL", "https://YOUR_PROJECT.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "k")
        assert sl._get_supabase_client() is None
