# indexes.py - Declared index sets and their reconciliation against MongoDB
import pymongo
from pymongo import ASCENDING, DESCENDING, IndexModel

from config import INDEX_TIMEOUT_SECONDS
from database import collection_exists
from errors import ADVISORY, StepResult
from schema import (
    USERS,
    GROUPS,
    CHORES,
    RECURRING_CHORES,
    CHORE_COMPLETIONS,
    SHOPPING_CART,
    PANTRY_CATEGORIES,
)

ADDITIVE = 'additive'
DESTRUCTIVE = 'destructive'

STEP = 'indexes'


class IndexPlan:
    """Target index set for one collection.

    ADDITIVE plans only create; creating an index that already exists with
    the same keys and options is a no-op on the server. DESTRUCTIVE plans
    drop every existing index of an already-present collection first, so
    stale definitions from older deployments cannot block convergence.
    Queries on that collection lose index support until the rebuild ends.
    """

    def __init__(self, collection, indexes, strategy=ADDITIVE):
        if strategy not in (ADDITIVE, DESTRUCTIVE):
            raise ValueError(f"unknown index strategy: {strategy}")
        self.collection = collection
        self.indexes = indexes
        self.strategy = strategy

    @property
    def destructive(self):
        return self.strategy == DESTRUCTIVE

    def __repr__(self):
        return f"IndexPlan({self.collection!r}, {len(self.indexes)} indexes, {self.strategy})"


INDEX_PLANS = [
    IndexPlan(USERS, [
        IndexModel([('username', ASCENDING)], unique=True),
        IndexModel([('phone_number', ASCENDING)], unique=True),
        IndexModel([('score', DESCENDING)]),
        IndexModel([('room_number', ASCENDING)]),
    ]),
    IndexPlan(GROUPS, [
        IndexModel([('name', ASCENDING)], unique=True),
        IndexModel([('group_code', ASCENDING)], unique=True),
    ], strategy=DESTRUCTIVE),
    IndexPlan(CHORES, [
        IndexModel([('group_id', ASCENDING)]),
        IndexModel([('assigned_to', ASCENDING)]),
        IndexModel([('status', ASCENDING)]),
        IndexModel([('due_date', ASCENDING)]),
        IndexModel([('recurring_id', ASCENDING)]),
    ]),
    IndexPlan(RECURRING_CHORES, [
        IndexModel([('group_id', ASCENDING)]),
        IndexModel([('is_active', ASCENDING)]),
        IndexModel([('next_assignment', ASCENDING)]),
    ]),
    IndexPlan(CHORE_COMPLETIONS, [
        IndexModel([('chore_id', ASCENDING)]),
        IndexModel([('user_id', ASCENDING)]),
        IndexModel([('completed_at', DESCENDING)]),
    ]),
    IndexPlan(SHOPPING_CART, [
        IndexModel([('group_id', ASCENDING)]),
        IndexModel([('user_id', ASCENDING)]),
        IndexModel([('item_name', ASCENDING)]),
        # One cart entry per item per user per group
        IndexModel(
            [('user_id', ASCENDING), ('group_id', ASCENDING), ('item_name', ASCENDING)],
            unique=True
        ),
    ]),
    IndexPlan(PANTRY_CATEGORIES, [
        # Predefined categories have no group_id and are not covered
        IndexModel(
            [('name', ASCENDING), ('group_id', ASCENDING)],
            unique=True,
            partialFilterExpression={'group_id': {'$exists': True}}
        ),
        IndexModel([('type', ASCENDING)]),
        IndexModel([('group_id', ASCENDING)]),
        IndexModel([('is_active', ASCENDING)]),
    ]),
]


def get_plan(collection, plans=None):
    for plan in plans or INDEX_PLANS:
        if plan.collection == collection:
            return plan
    raise KeyError(collection)


def describe_plan(plan):
    """Human readable list of the declared indexes"""
    lines = []
    for model in plan.indexes:
        doc = model.document
        keys = ", ".join(f"{field} {'asc' if direction == ASCENDING else 'desc'}"
                         for field, direction in doc['key'].items())
        flags = []
        if doc.get('unique'):
            flags.append('unique')
        if doc.get('partialFilterExpression'):
            flags.append(f"partial {doc['partialFilterExpression']}")
        suffix = f" ({', '.join(flags)})" if flags else ""
        lines.append(f"{plan.collection}: {keys}{suffix}")
    return lines


def reconcile(db, plan, migrate=None):
    """Bring one collection's indexes in line with its plan.

    Phase 1 runs only for destructive plans on a collection that already
    exists: drop all indexes, then run ``migrate(db)`` so documents satisfy
    the new unique keys. Errors here are advisory. Phase 2 creates the
    declared indexes; any error there is fatal.
    """
    collection = db[plan.collection]
    notes = []
    dropped = False

    if plan.destructive and collection_exists(db, plan.collection):
        print(f"🗑️ Dropping existing {plan.collection} indexes for rebuild")
        try:
            collection.drop_indexes()
            dropped = True
        except Exception as e:
            print(f"⚠️ Failed to drop {plan.collection} indexes: {e}")
            notes.append(f"drop failed: {e}")

        if migrate is not None:
            migration = migrate(db)
            if not migration.is_ok:
                notes.append(f"migration failed: {migration.message}")

    try:
        created = collection.create_indexes(plan.indexes)
    except Exception as e:
        print(f"❌ Failed to create {plan.collection} indexes: {e}")
        return StepResult.fatal(
            STEP, e,
            message=f"failed to create {plan.collection} indexes: {e}",
            collection=plan.collection,
            dropped=dropped,
        )

    print(f"✅ {plan.collection}: {len(created)} index(es) in place")
    if notes:
        return StepResult(
            STEP, status=ADVISORY, message="; ".join(notes),
            collection=plan.collection, created=len(created), dropped=dropped,
        )
    return StepResult.ok(STEP, collection=plan.collection, created=len(created), dropped=dropped)


def converge_all(db, plans=None, migrate=None):
    """Reconcile every plan in order, stopping at the first fatal result.

    Collections converged before a failure keep their indexes; the next
    start finishes the job since index creation is safe to repeat.
    """
    results = []
    print("🔄 Creating collections and indexes...")
    with pymongo.timeout(INDEX_TIMEOUT_SECONDS):
        for plan in plans or INDEX_PLANS:
            result = reconcile(db, plan, migrate=migrate if plan.destructive else None)
            results.append(result)
            if result.is_fatal:
                break
    return results
