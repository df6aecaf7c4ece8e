"""Serializers for authentication flows (register, login) and user payloads."""

from rest_framework import serializers

from .managers import UserManager
from .models import User

# bcrypt only accepts the first 72 bytes of a password.
PASSWORD_MAX_LENGTH = 72


def validate_password_bytes(value: str) -> str:
    if len(value.encode()) > PASSWORD_MAX_LENGTH:
        raise serializers.ValidationError(f"Ensure this field has no more than {PASSWORD_MAX_LENGTH} bytes.")
    return value


class NormalizedEmailField(serializers.EmailField):
    """EmailField that stores and compares addresses lower-cased."""

    def to_internal_value(self, data):
        return UserManager.normalize_email(super().to_internal_value(data))


class RegisterSerializer(serializers.Serializer):
    """Validate registration input; uniqueness is checked by AuthService (409)."""

    name = serializers.CharField(min_length=3, max_length=100)
    email = NormalizedEmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        max_length=PASSWORD_MAX_LENGTH,
        validators=[validate_password_bytes],
    )


class LoginSerializer(serializers.Serializer):
    """Shape check for login; credential verification happens in AuthService."""

    email = NormalizedEmailField()
    password = serializers.CharField(write_only=True, validators=[validate_password_bytes])


class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only user payload; credentials and deletion markers never leave the server."""

    class Meta:
        """Expose identity fields and role."""
        model = User
        fields = [
            "id",
            "name",
            "email",
            "role",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


__all__ = [
    "NormalizedEmailField",
    "RegisterSerializer",
    "LoginSerializer",
    "UserDetailSerializer",
    "PASSWORD_MAX_LENGTH",
    "validate_password_bytes",
]
