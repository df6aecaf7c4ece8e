"""Serializers for user listing and profile updates."""

from rest_framework import serializers

from authentication.serializers import (
    PASSWORD_MAX_LENGTH,
    NormalizedEmailField,
    UserDetailSerializer,
    validate_password_bytes,
)


class UserSummarySerializer(UserDetailSerializer):
    """User payload plus the number of published articles."""

    article_count = serializers.IntegerField(read_only=True)

    class Meta(UserDetailSerializer.Meta):
        fields = [*UserDetailSerializer.Meta.fields, "article_count"]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    """Patchable profile fields.

    Password rules (current password required and verified) are enforced by
    ProfileService so they map to their own error kinds.
    """

    name = serializers.CharField(min_length=3, max_length=100, required=False)
    email = NormalizedEmailField(required=False)
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        max_length=PASSWORD_MAX_LENGTH,
        required=False,
        validators=[validate_password_bytes],
    )
    current_password = serializers.CharField(
        write_only=True, required=False, allow_blank=True, validators=[validate_password_bytes]
    )


__all__ = ["UserSummarySerializer", "ProfileUpdateSerializer"]
