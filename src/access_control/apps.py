"""App configuration for ownership policies and permissions."""

from django.apps import AppConfig


class AccessControlConfig(AppConfig):
    """Owns the ownership/role policies; holds no models of its own."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "access_control"

    def ready(self) -> None:
        """Hook up the owner_field system check."""
        from . import checks  # noqa: F401
