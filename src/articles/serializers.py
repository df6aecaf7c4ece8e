"""Serializers for articles: allow-listed read shapes and a validated write shape."""

from rest_framework import serializers

from authentication.models import User
from .models import Article


class AuthorSerializer(serializers.ModelSerializer):
    """Public author fields only; never the email or credentials."""

    class Meta:
        model = User
        fields = ["id", "name"]
        read_only_fields = fields


class ArticleListSerializer(serializers.ModelSerializer):
    author = AuthorSerializer(read_only=True)

    class Meta:
        """Listing shape without the article body."""
        model = Article
        fields = [
            "id",
            "title",
            "slug",
            "image_url",
            "category",
            "description",
            "published",
            "created_at",
            "updated_at",
            "author",
        ]
        read_only_fields = fields


class ArticleDetailSerializer(ArticleListSerializer):
    class Meta(ArticleListSerializer.Meta):
        fields = [*ArticleListSerializer.Meta.fields, "content"]
        read_only_fields = fields


class ArticleWriteSerializer(serializers.ModelSerializer):
    """Validate client input for create and update.

    ``slug``, ``author``, and timestamps are server-assigned; a payload that
    tries to set ``slug`` on update is rejected rather than silently ignored.
    """

    title = serializers.CharField(min_length=5, max_length=200)
    image_url = serializers.URLField(max_length=500)
    category = serializers.CharField(min_length=3, max_length=100)
    description = serializers.CharField(min_length=20, max_length=500)
    content = serializers.CharField(min_length=50)
    published = serializers.BooleanField(required=False, default=False)

    class Meta:
        model = Article
        fields = ["title", "image_url", "category", "description", "content", "published"]

    def validate(self, attrs):
        if self.instance is not None and "slug" in getattr(self, "initial_data", {}):
            raise serializers.ValidationError({"slug": "Slug cannot be changed manually."})
        return attrs


__all__ = [
    "AuthorSerializer",
    "ArticleListSerializer",
    "ArticleDetailSerializer",
    "ArticleWriteSerializer",
]
