"""System checks for ownership-guarded views."""

from django.core.checks import Error, register

from access_control.permissions import IsOwnerOrAdmin


def _uses_ownership_guard(view_cls) -> bool:
    return IsOwnerOrAdmin in getattr(view_cls, "permission_classes", [])


def check_views_declare_owner_field(view_classes) -> list[Error]:
    """Return an error for each view that guards ownership without ``owner_field``."""
    errors: list[Error] = []
    for view_cls in view_classes:
        if _uses_ownership_guard(view_cls) and not getattr(view_cls, "owner_field", None):
            errors.append(
                Error(
                    f"{view_cls.__name__} uses IsOwnerOrAdmin but does not define owner_field.",
                    obj=view_cls,
                    id="access_control.E001",
                )
            )
    return errors


@register()
def ownership_views_have_owner_field(app_configs, **kwargs):
    """Ensure ownership-guarded views name the attribute holding the owner id.

    Only the project's known viewsets are inspected; new guarded views should
    be added to this list.
    """

    # Import here to avoid circular imports at module load time.
    from articles.views import ArticleViewSet
    from users.views import UserViewSet

    return check_views_declare_owner_field([ArticleViewSet, UserViewSet])
