"""
Verify the Supabase state table exists, is readable and is writable.
Run: python verify_supabase.py
"""
import json
import sys

import supabase_loader as sl


def main():
    client = sl._get_supabase_client()
    if client is None:
        print("ERROR: SUPABASE_URL and SUPABASE_KEY must be set in .env")
        return 1

    table = sl._state_table()
    store = sl.SupabaseStore(client, table=table)

    print("=" * 60)
    print(f"Supabase State Verification ({table})")
    print("=" * 60)

    try:
        store.ping()
    except Exception as e:
        err = str(e)
        if "PGRST205" in err or "not find" in err:
            status = "MISSING"
        elif "permission" in err.lower() or "42501" in err:
            status = "NO ACCESS"
        else:
            status = "ERROR"
        print(f"  {status:12s} {table} — {err}")
        print("\nCreate it with:")
        print(f"  CREATE TABLE {table} (key TEXT PRIMARY KEY, value TEXT NOT NULL);")
        return 1

    for key in sl.STATE_KEYS:
        text = store.load(key)
        if text is None:
            print(f"  {'EMPTY':12s} {key}")
            continue
        try:
            count = len(json.loads(text))
            print(f"  {'OK':12s} {key:24s} ({count} entries)")
        except ValueError:
            print(f"  {'CORRUPT':12s} {key:24s} (not valid JSON)")

    print("\nTesting write access...")
    probe = "__verify_supabase__"
    try:
        store.save(probe, "[]")
        client.table(table).delete().eq("key", probe).execute()
        print(f"  WRITE OK    {table}")
    except Exception as e:
        print(f"  WRITE FAIL  {table} — {e}")
        return 1

    print("\nAll checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
