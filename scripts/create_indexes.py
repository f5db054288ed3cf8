#!/usr/bin/env python3
"""Converge MongoDB indexes outside the web app startup path."""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import load_settings
from database import connect
from errors import BootstrapError
from indexes import INDEX_PLANS, converge_all, describe_plan
from migrate_groups import migrate_groups


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--show", action="store_true", help="Print the declared indexes and exit")
    args = parser.parse_args()

    if args.show:
        for plan in INDEX_PLANS:
            print(f"[{plan.strategy}]")
            for line in describe_plan(plan):
                print(f"  {line}")
        return

    try:
        ctx = connect(load_settings())
    except BootstrapError as e:
        print(f"Database not connected: {e}")
        raise SystemExit(1)

    try:
        migrate_groups(ctx.db)
        results = converge_all(ctx.db, migrate=migrate_groups)
    finally:
        ctx.close()

    failed = [r for r in results if r.is_fatal]
    if failed:
        print(f"Index creation failed: {failed[0].message}")
        raise SystemExit(1)

    print("Index creation completed.")


if __name__ == "__main__":
    main()
