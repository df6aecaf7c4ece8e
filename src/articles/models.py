"""Article model with draft/published state and soft delete."""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q


class ArticleQuerySet(models.QuerySet):
    """Visibility filters shared by the public, author, and admin reads."""

    def active(self):
        return self.filter(deleted_at__isnull=True)

    def published(self):
        return self.active().filter(published=True)

    def by_category(self, category: str):
        return self.filter(category__iexact=category)

    def search(self, query: str):
        """Case-insensitive substring match over title, author, description, content."""
        return self.filter(
            Q(title__icontains=query)
            | Q(author__name__icontains=query)
            | Q(description__icontains=query)
            | Q(content__icontains=query)
        )


class Article(models.Model):
    """Blog article owned by its author."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=255)
    image_url = models.URLField(max_length=500)
    category = models.CharField(max_length=100, db_index=True)
    description = models.CharField(max_length=500)
    content = models.TextField()
    published = models.BooleanField(default=False)
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="articles")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = ArticleQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["slug"],
                condition=Q(deleted_at__isnull=True),
                name="unique_active_article_slug",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title


__all__ = ["Article", "ArticleQuerySet"]
