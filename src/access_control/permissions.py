"""DRF permission classes built on the ownership/role policies."""

from rest_framework import permissions

from .policies import ensure_can_modify, is_admin, is_authenticated


class IsAdmin(permissions.BasePermission):
    """Allow only principals with the ADMIN role."""

    message = "Access denied. Admin role required."

    def has_permission(self, request, view) -> bool:
        return is_admin(getattr(request, "user", None))


class IsOwnerOrAdmin(permissions.BasePermission):
    """Gate unsafe methods on the resource owner.

    Views declare ``owner_field``, the attribute of the object holding the
    owning user's id (``author_id`` for articles, ``id`` for users), and may
    list ``admin_bypass_actions`` in which administrators skip the ownership
    comparison. Objects are resolved (and 404ed) by ``get_object`` before
    this check runs, so a missing resource never reads as a denial.
    """

    message = "You don't have permission to modify this resource."

    def has_permission(self, request, view) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_authenticated(getattr(request, "user", None))

    def has_object_permission(self, request, view, obj) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True

        owner_field = getattr(view, "owner_field", None)
        if not owner_field:
            return False

        admin_bypass = getattr(view, "action", None) in getattr(view, "admin_bypass_actions", ())
        ensure_can_modify(
            request.user,
            getattr(obj, owner_field, None),
            admin_bypass=admin_bypass,
            message=self.message,
        )
        return True


__all__ = ["IsAdmin", "IsOwnerOrAdmin"]
