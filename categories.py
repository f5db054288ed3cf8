# categories.py - Predefined pantry category catalog
from datetime import datetime, timezone

from schema import CATEGORY_TYPE_PREDEFINED

PREDEFINED_CATEGORIES = [
    "Dairy",
    "Fruits",
    "Vegetables",
    "Grains & Cereals",
    "Meat & Poultry",
    "Seafood",
    "Beverages",
    "Snacks",
    "Condiments & Sauces",
    "Spices & Seasonings",
    "Baking Supplies",
    "Frozen Foods",
    "Canned Goods",
    "Oils & Vinegars",
    "Nuts & Seeds",
    "Bread & Bakery",
    "Pasta & Rice",
    "Cleaning Supplies",
    "Personal Care",
    "Other",
]


def make_predefined_category(name, now=None):
    """Build a global (ungrouped) category document"""
    now = now or datetime.now(timezone.utc)
    # No group_id: the (name, group_id) unique index only covers grouped categories
    return {
        "name": name,
        "type": CATEGORY_TYPE_PREDEFINED,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    }


def build_predefined_categories(names=None, now=None):
    now = now or datetime.now(timezone.utc)
    return [make_predefined_category(name, now) for name in (names or PREDEFINED_CATEGORIES)]
