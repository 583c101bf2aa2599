"""
The role → capability table.

Views and permissions ask `user.can(capability)` instead of comparing role strings, so what each role
is allowed to do is decided in this one place.
"""

BROWSE_STORES = 'browse_stores'
RATE_STORES = 'rate_stores'
MANAGE_PROFILE = 'manage_profile'
VIEW_OWN_STORES = 'view_own_stores'
VIEW_STORE_RATINGS = 'view_store_ratings'
MANAGE_USERS = 'manage_users'
MANAGE_STORES = 'manage_stores'
MANAGE_RATINGS = 'manage_ratings'
VIEW_DASHBOARD = 'view_dashboard'
# Lets a role act on store-scoped resources without owning the store.
BYPASS_OWNERSHIP = 'bypass_ownership'

_BASE = frozenset({BROWSE_STORES, RATE_STORES, MANAGE_PROFILE})

# Keys are the values of `User.Role`.
ROLE_CAPABILITIES = {
    'user': _BASE,
    'store_owner': _BASE | {VIEW_OWN_STORES, VIEW_STORE_RATINGS},
    'admin': _BASE | {
        VIEW_STORE_RATINGS,
        MANAGE_USERS,
        MANAGE_STORES,
        MANAGE_RATINGS,
        VIEW_DASHBOARD,
        BYPASS_OWNERSHIP,
    },
}
