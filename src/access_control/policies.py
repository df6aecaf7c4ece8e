"""Ownership and role policies shared by views and services.

Every mutating route asks the same question: is the acting principal the
resource's owner, or (where the route allows it) an administrator? These
predicates answer it in one place instead of inline comparisons.
"""

from typing import Any

from core.errors import Forbidden


def is_authenticated(principal: Any) -> bool:
    return principal is not None and bool(getattr(principal, "is_authenticated", False))


def is_admin(principal: Any) -> bool:
    return is_authenticated(principal) and bool(getattr(principal, "is_admin", False))


def is_owner(principal: Any, owner_id: Any) -> bool:
    """True when the principal's id matches the resource owner's id."""
    if not is_authenticated(principal) or owner_id is None:
        return False
    return str(principal.id) == str(owner_id)


def can_modify(principal: Any, owner_id: Any, *, admin_bypass: bool = False) -> bool:
    """Owner always; administrators only when the route grants ``admin_bypass``."""
    if is_owner(principal, owner_id):
        return True
    return admin_bypass and is_admin(principal)


def ensure_can_modify(
    principal: Any,
    owner_id: Any,
    *,
    admin_bypass: bool = False,
    message: str | None = None,
) -> None:
    """Raise Forbidden unless ``can_modify`` allows the principal."""
    if not can_modify(principal, owner_id, admin_bypass=admin_bypass):
        raise Forbidden(message)


__all__ = ["is_authenticated", "is_admin", "is_owner", "can_modify", "ensure_can_modify"]
