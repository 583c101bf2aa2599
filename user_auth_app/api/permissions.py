from functools import lru_cache

from rest_framework.permissions import BasePermission

from user_auth_app.capabilities import BYPASS_OWNERSHIP


class HasCapability(BasePermission):
    """
    Role gate: grants access when the authenticated user's role holds `capability`.

    A subclass with `capability = None` only requires authentication, which is how endpoints open
    to every role are expressed. Anonymous requests are always denied; DRF turns that into a
    401 response because an authenticator is configured.
    """
    capability = None
    message = "Your role is not allowed to perform this action."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if self.capability is None:
            return True
        return request.user.can(self.capability)


@lru_cache(maxsize=None)
def capability_required(capability):
    """
    Builds a `HasCapability` permission class for one capability. The class is built once per
    capability and reused by every later call.

    Usage in a view: `permission_classes = [capability_required(MANAGE_USERS)]`.
    """
    return type(
        f'Requires_{capability}',
        (HasCapability,),
        {'capability': capability}
    )


class IsStoreOwnerOrAdmin(BasePermission):
    """
    Object-level permission for store-scoped resources.

    The object is a `Store`. Access is granted to the store's owner, or to any role holding the
    `bypass_ownership` capability (administrators).
    """
    message = "Access denied: you do not own this store."

    def has_object_permission(self, request, view, obj):
        if request.user.can(BYPASS_OWNERSHIP):
            return True
        return obj.owner_id is not None and obj.owner_id == request.user.id
