#!/usr/bin/env python3
"""Migration to add the month-parity filter to profiles and prayer topics.

Databases created before odd/even month rotation have only pray_day. Existing
rows get pray_months = 0 (all months), so nobody drops off the calendar.
Run this once to upgrade existing databases. Safe to run multiple times (idempotent).
"""

import os
import sqlite3
import sys
from pathlib import Path

TABLES = ("profiles", "prayer_topics")


def migrate():
    # Get database path from environment or use default
    db_path = os.environ.get("PRAYER_DIARY_DB_PATH")

    if not db_path:
        prod_path = Path("/data/prayer_diary.db")
        dev_path = Path(__file__).parent.parent / "prayer_diary.db"
        db_path = str(prod_path) if prod_path.exists() else str(dev_path)

    db_path = Path(db_path)

    if not db_path.exists():
        print(f"✓ Database not found at {db_path}")
        print("  No migration needed - database will be created with correct schema on first run.")
        return True

    print(f"Checking database at {db_path}...")

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        for table in TABLES:
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,))
            if not cursor.fetchone():
                print(f"✓ Migration: {table} table does not exist yet, skipping")
                continue

            cursor.execute(f"PRAGMA table_info({table})")
            columns = [row[1] for row in cursor.fetchall()]
            if "pray_months" in columns:
                print(f"✓ Migration: {table}.pray_months already exists (idempotent check)")
                continue

            print(f"  Adding 'pray_months' column to {table}...")
            cursor.execute(f"ALTER TABLE {table} ADD COLUMN pray_months INTEGER NOT NULL DEFAULT 0")
            print(f"✓ Migration: {table}.pray_months added")

        conn.commit()
        return True

    except sqlite3.Error as e:
        print(f"✗ Migration failed: {e}")
        return False
    finally:
        conn.close()


if __name__ == "__main__":
    success = migrate()
    sys.exit(0 if success else 1)
