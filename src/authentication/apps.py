"""App configuration for accounts and bearer tokens."""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Holds the email-identified User model, its bcrypt backend, and JWT services."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
