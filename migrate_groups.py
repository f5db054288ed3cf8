#!/usr/bin/env python3
"""Backfill group_code on groups created before the field existed.

Runs automatically during bootstrap. Can also be run by hand:
    python migrate_groups.py
    python migrate_groups.py --dry-run
"""

import argparse

from config import load_settings
from database import connect
from errors import BootstrapError, StepResult
from schema import GROUPS, LEGACY_GROUP_CODE

STEP = 'migrate_groups'
MISSING_GROUP_CODE = {"group_code": {"$exists": False}}


def count_legacy_groups(db):
    return db[GROUPS].count_documents(MISSING_GROUP_CODE)


def migrate_groups(db):
    """Set group_code to the legacy sentinel on every group lacking one.

    A single bulk update, safe to repeat. Failures are advisory: a fresh
    database has nothing to migrate.
    """
    try:
        result = db[GROUPS].update_many(
            MISSING_GROUP_CODE,
            {"$set": {"group_code": LEGACY_GROUP_CODE}},
        )
    except Exception as e:
        print(f"⚠️ Could not migrate existing groups: {e}")
        return StepResult.advisory(STEP, e, collection=GROUPS, modified=0)

    modified = result.modified_count
    if modified:
        print(f"🔧 Set group_code='{LEGACY_GROUP_CODE}' on {modified} legacy group(s)")
    return StepResult.ok(STEP, f"migrated {modified} group(s)", collection=GROUPS, modified=modified)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--dry-run", action="store_true", help="Only count groups missing group_code")
    args = parser.parse_args()

    try:
        ctx = connect(load_settings())
    except BootstrapError as e:
        print(f"Database connection unavailable: {e}")
        raise SystemExit(1)

    try:
        if args.dry_run:
            print(f"Groups missing group_code: {count_legacy_groups(ctx.db)}")
            return

        result = migrate_groups(ctx.db)
        print(f"Done. status={result.status} modified={result.counters.get('modified', 0)}")
        if not result.is_ok:
            raise SystemExit(1)
    finally:
        ctx.close()


if __name__ == "__main__":
    main()
