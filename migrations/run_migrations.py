#!/usr/bin/env python3
"""Apply every Prayer Diary schema migration, oldest first.

Each migration module exposes an idempotent migrate() returning True on
success, so the whole chain can be re-run against any database.
"""

import importlib
import sys
from pathlib import Path

# Applied in this order; append new migrations at the end
MIGRATIONS = (
    "migrate_add_pray_months",
    "migrate_add_calendar_hide",
)


def run_migrations(names=MIGRATIONS) -> bool:
    """Run the named migrations, stopping at the first one that fails."""
    migrations_dir = str(Path(__file__).resolve().parent)
    if migrations_dir not in sys.path:
        sys.path.insert(0, migrations_dir)

    print(f"Applying {len(names)} Prayer Diary migration(s)")
    for position, name in enumerate(names, start=1):
        print(f"\n[{position:03d}] {name}")
        try:
            ok = importlib.import_module(name).migrate()
        except Exception as e:
            print(f"✗ {name} raised: {e}")
            return False
        if ok is False:
            print(f"✗ {name} failed, later migrations skipped")
            return False

    print("\n✓ Schema is up to date")
    return True


if __name__ == "__main__":
    sys.exit(0 if run_migrations() else 1)
