"""Authentication backend verifying email/password against bcrypt hashes."""

from django.contrib.auth.backends import BaseBackend

from .managers import UserManager
from .models import User


class EmailPasswordBackend(BaseBackend):
    """Authenticate active users by email and password.

    Returns None both for unknown emails and for wrong passwords so callers
    cannot tell the two apart. Soft-deleted accounts never authenticate.
    """

    def authenticate(self, request, email: str | None = None, password: str | None = None, **kwargs):
        if not email or password is None:
            return None
        user = User.objects.get_active_by_email(email)
        if user is None:
            # Keep timing uniform with the wrong-password path.
            UserManager.hash_password(password)
            return None
        if not UserManager.verify_password(password, user.password_hash):
            return None
        return user

    def get_user(self, user_id):
        return User.objects.active().filter(pk=user_id).first()


__all__ = ["EmailPasswordBackend"]
