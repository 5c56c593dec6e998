"""
reset_data.py — Reset the order dashboard to an empty ledger.

Backs up the local JSON documents (orders, categories, seller payouts) into
data/_backup_YYYYMMDD_HHMMSS/, then deletes the matching rows from the
Supabase state table.  Restart the dashboard afterwards; it comes back with
no orders, no payouts and the default categories.

Usage:  python reset_data.py
"""

import os
import shutil
from datetime import datetime

import supabase_loader as sl


def backup_files():
    """Move each <key>.json document into a timestamped backup folder."""
    data_dir = sl._data_dir()
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_root = os.path.join(str(data_dir), f"_backup_{stamp}")

    moved = 0
    for key in sl.STATE_KEYS:
        src = os.path.join(str(data_dir), f"{key}.json")
        if not os.path.isfile(src):
            continue
        os.makedirs(backup_root, exist_ok=True)
        shutil.move(src, os.path.join(backup_root, f"{key}.json"))
        moved += 1

    return backup_root, moved


def clear_supabase():
    """Delete the dashboard's rows from the Supabase state table."""
    client = sl._get_supabase_client()
    if client is None:
        print("  Supabase credentials not configured — skipping.")
        return 0

    table = sl._state_table()
    cleared = 0
    for key in sl.STATE_KEYS:
        try:
            client.table(table).delete().eq("key", key).execute()
            cleared += 1
            print(f"  Cleared {table}.{key}")
        except Exception as e:
            print(f"  Failed to clear {table}.{key}: {e}")

    return cleared


def main():
    print("=" * 50)
    print("  RESET ORDER DASHBOARD")
    print("=" * 50)

    backup_path, file_count = backup_files()
    print(f"\n  Local documents moved: {file_count}")
    if file_count:
        print(f"  -> {backup_path}")

    key_count = clear_supabase()
    print(f"  Supabase keys cleared: {key_count}/{len(sl.STATE_KEYS)}")

    print("\n  Next start loads an empty ledger with the default categories.")
    print("  Undo: copy the backed-up *.json files back into the data folder.")
    print("  Start:  python -m ce_orders.app")
    print("=" * 50)


if __name__ == "__main__":
    main()
