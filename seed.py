# seed.py - One-time seeding of the predefined pantry categories
import pymongo

from categories import build_predefined_categories
from config import SEED_TIMEOUT_SECONDS
from errors import StepResult
from schema import PANTRY_CATEGORIES, CATEGORY_TYPE_PREDEFINED

STEP = 'seed_categories'


def seed_predefined_categories(db, names=None):
    """Insert the predefined category catalog if none exists yet.

    The guard is all-or-nothing: any predefined category already present
    means the catalog counts as seeded, even if an earlier insert was cut
    short. Failures are advisory.
    """
    categories = db[PANTRY_CATEGORIES]

    with pymongo.timeout(SEED_TIMEOUT_SECONDS):
        try:
            count = categories.count_documents({"type": CATEGORY_TYPE_PREDEFINED})
        except Exception as e:
            print(f"⚠️ Could not check existing predefined categories: {e}")
            return StepResult.advisory(
                STEP, e, message=f"failed to check existing predefined categories: {e}",
                collection=PANTRY_CATEGORIES, inserted=0,
            )

        if count > 0:
            print(f"ℹ️ Predefined categories already exist ({count} found), skipping seeding")
            return StepResult.ok(
                STEP, "already seeded", collection=PANTRY_CATEGORIES, existing=count, inserted=0,
            )

        documents = build_predefined_categories(names)
        try:
            result = categories.insert_many(documents)
        except Exception as e:
            print(f"⚠️ Could not seed predefined categories: {e}")
            return StepResult.advisory(
                STEP, e, message=f"failed to insert predefined categories: {e}",
                collection=PANTRY_CATEGORIES, inserted=0,
            )

    inserted = len(result.inserted_ids)
    print(f"🌱 Successfully seeded {inserted} predefined categories")
    return StepResult.ok(STEP, f"seeded {inserted}", collection=PANTRY_CATEGORIES, existing=0, inserted=inserted)
