"""Custom user manager handling bcrypt hashing and active-user lookups."""

import bcrypt
from django.contrib.auth.base_user import BaseUserManager


class UserManager(BaseUserManager):
    """Manager to create users with bcrypt password hashes."""

    use_in_migrations = True

    @classmethod
    def normalize_email(cls, email: str | None) -> str:
        """Lower-case the whole address; emails compare case-insensitively."""
        return (email or "").strip().lower()

    def active(self):
        """Users that have not been soft-deleted."""
        return self.get_queryset().filter(deleted_at__isnull=True)

    def get_active_by_email(self, email: str):
        """Return the active user holding ``email`` or None."""
        return self.active().filter(email=self.normalize_email(email)).first()

    def _create_user(self, email: str, password: str, **extra_fields):
        email = self.normalize_email(email)
        if not email:
            raise ValueError("An email address is required.")
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        """Create an author account (role USER unless given)."""
        extra_fields.setdefault("role", self.model.Role.USER)
        if password is None:
            raise ValueError("A password is required.")
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str, **extra_fields):
        """Create an administrator account; used by ``createsuperuser``."""
        extra_fields.setdefault("role", self.model.Role.ADMIN)
        if extra_fields.get("role") != self.model.Role.ADMIN:
            raise ValueError("Superuser must have role=ADMIN.")
        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def hash_password(raw_password: str) -> str:
        """Salted bcrypt hash of ``raw_password`` as an ASCII string."""
        return bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt()).decode("ascii")

    @staticmethod
    def verify_password(raw_password: str, password_hash: str) -> bool:
        """Check ``raw_password`` against a stored bcrypt hash."""
        if not password_hash:
            return False
        return bcrypt.checkpw(raw_password.encode("utf-8"), password_hash.encode("ascii"))


__all__ = ["UserManager"]
