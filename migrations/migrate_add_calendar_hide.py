#!/usr/bin/env python3
"""Migration to add the calendar_hide flag to profiles.

Members who set this flag stay registered but never appear on the prayer
calendar. Existing rows default to visible.
Run this once to upgrade existing databases. Safe to run multiple times (idempotent).
"""

import os
import sqlite3
import sys
from pathlib import Path


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
        cursor.execute("PRAGMA table_info(profiles)")
        columns = [row[1] for row in cursor.fetchall()]

        if not columns:
            print("✓ Migration: profiles table does not exist yet, skipping")
        elif "calendar_hide" in columns:
            print("✓ Migration: calendar_hide column already exists (idempotent check)")
        else:
            print("  Adding 'calendar_hide' column to profiles...")
            cursor.execute("ALTER TABLE profiles ADD COLUMN calendar_hide BOOLEAN NOT NULL DEFAULT 0")
            print("✓ Migration: calendar_hide column added")

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
