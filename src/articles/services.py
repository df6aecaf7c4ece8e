"""Article lifecycle: creation, updates with slug regeneration, publish, delete."""

import logging
import time
from typing import Any

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.errors import SlugConflict
from .models import Article
from .utils import FALLBACK_SLUG, slugify

logger = logging.getLogger(__name__)

# Path segments routed to list-level actions; an article slug must never equal one.
RESERVED_SLUGS = frozenset({"search", "category", "admin"})


def unique_slug(title: str, exclude_id: Any = None) -> str:
    """Slug for ``title`` that no other active article holds.

    On collision, or when the slug would shadow a list route, a millisecond
    timestamp is appended. A collision of the disambiguated slug is left to
    the database constraint.
    """
    slug = slugify(title) or FALLBACK_SLUG
    taken = Article.objects.active().filter(slug=slug)
    if exclude_id is not None:
        taken = taken.exclude(pk=exclude_id)
    if slug in RESERVED_SLUGS or taken.exists():
        slug = f"{slug}-{int(time.time() * 1000)}"
    return slug


class ArticleService:
    """Write paths for articles; ownership is enforced by the calling view."""

    EDITABLE_FIELDS = ("title", "image_url", "category", "description", "content", "published")

    @classmethod
    def create(cls, author, data: dict[str, Any]) -> Article:
        """Create an article owned by ``author``; drafts unless ``published``."""
        fields = {name: data[name] for name in cls.EDITABLE_FIELDS if name in data}
        try:
            with transaction.atomic():
                article = Article.objects.create(
                    author=author,
                    slug=unique_slug(fields["title"]),
                    **fields,
                )
        except IntegrityError as exc:
            raise SlugConflict() from exc
        logger.info("Article %s created by %s (slug=%s)", article.id, author.id, article.slug)
        return article

    @classmethod
    def update(cls, article: Article, data: dict[str, Any]) -> Article:
        """Apply editable fields; the slug follows the title only when it changes."""
        changed = []
        for name in cls.EDITABLE_FIELDS:
            if name in data and getattr(article, name) != data[name]:
                setattr(article, name, data[name])
                changed.append(name)

        if "title" in changed:
            article.slug = unique_slug(article.title, exclude_id=article.pk)
            changed.append("slug")

        if changed:
            try:
                with transaction.atomic():
                    article.save(update_fields=[*changed, "updated_at"])
            except IntegrityError as exc:
                raise SlugConflict() from exc
            logger.info("Article %s updated (%s)", article.id, ", ".join(changed))
        return article

    @staticmethod
    def toggle_publish(article: Article) -> Article:
        """Flip Draft <-> Published for an active article."""
        article.published = not article.published
        article.save(update_fields=["published", "updated_at"])
        logger.info("Article %s published=%s", article.id, article.published)
        return article

    @staticmethod
    def soft_delete(article: Article, actor) -> None:
        """Mark the article deleted; there is no undelete."""
        article.deleted_at = timezone.now()
        article.save(update_fields=["deleted_at", "updated_at"])
        logger.info("Article %s deleted by %s", article.id, actor.id)


__all__ = ["ArticleService", "unique_slug", "RESERVED_SLUGS"]
