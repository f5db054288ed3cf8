#!/usr/bin/env python3
"""Startup bootstrap: connect, migrate, converge indexes, seed.

Call ``bootstrap()`` once at process start and pass the returned context
to everything that needs the database or the auth secret. Run directly to
bootstrap a database without starting the web app:
    python bootstrap.py
"""

from pymongo import MongoClient

from config import load_settings
from database import connect
from errors import BootstrapError, IndexConvergenceError, OK
from indexes import converge_all
from migrate_groups import migrate_groups
from seed import seed_predefined_categories


def _report(result):
    if result.status == OK:
        return
    where = f" [{result.collection}]" if result.collection else ""
    icon = "❌" if result.is_fatal else "⚠️"
    print(f"{icon} {result.step}{where}: {result.message}")


def run_steps(ctx, plans=None):
    """Run migration, index convergence and seeding against a connected context.

    Returns the ordered StepResults. Raises IndexConvergenceError on the
    first collection whose indexes cannot be created; migration and seeding
    problems are only reported.
    """
    results = []

    # group_code must be filled in before its unique index is built
    migration = migrate_groups(ctx.db)
    _report(migration)
    results.append(migration)

    for result in converge_all(ctx.db, plans=plans, migrate=migrate_groups):
        _report(result)
        results.append(result)
        if result.is_fatal:
            raise IndexConvergenceError(result.collection, result.error)

    seeding = seed_predefined_categories(ctx.db)
    _report(seeding)
    results.append(seeding)

    print("✅ Successfully initialized database collections and indexes")
    return results


def bootstrap(settings=None, client_factory=MongoClient, plans=None):
    """Produce a ready-to-use AppContext or raise BootstrapError"""
    if settings is None:
        settings = load_settings()

    ctx = connect(settings, client_factory=client_factory)
    try:
        ctx.bootstrap_results = run_steps(ctx, plans=plans)
    except BootstrapError:
        ctx.close()
        raise
    return ctx


def main():
    try:
        ctx = bootstrap()
    except BootstrapError as e:
        print(f"❌ Failed to initialize database: {e}")
        raise SystemExit(1)

    for result in ctx.bootstrap_results:
        print(f"  - {result.step:<16} {result.status:<9} {result.collection or ''} {result.message}".rstrip())
    ctx.close()


if __name__ == "__main__":
    main()
