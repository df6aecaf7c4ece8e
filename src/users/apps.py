"""App configuration for user profile endpoints."""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Users app exposes profiles; the User model itself lives in authentication."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
