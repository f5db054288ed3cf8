# schema.py - Collection names and field constants shared by the bootstrap steps

USERS = 'users'
GROUPS = 'groups'
CHORES = 'chores'
RECURRING_CHORES = 'recurring_chores'
CHORE_COMPLETIONS = 'chore_completions'
SHOPPING_CART = 'shopping_cart'
PANTRY_CATEGORIES = 'pantry_categories'

ALL_COLLECTIONS = [
    USERS,
    GROUPS,
    CHORES,
    RECURRING_CHORES,
    CHORE_COMPLETIONS,
    SHOPPING_CART,
    PANTRY_CATEGORIES,
]

# Groups created before group_code existed get this value
LEGACY_GROUP_CODE = 'LEGACY'

CATEGORY_TYPE_PREDEFINED = 'predefined'
CATEGORY_TYPE_CUSTOM = 'custom'
