"""Profile management: listing, updates, and account deletion."""

import logging
from typing import Any

from django.db import transaction
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from access_control.policies import is_admin, is_owner
from articles.models import Article
from authentication.models import User
from core.errors import CurrentPasswordIncorrect, CurrentPasswordRequired, EmailInUse

logger = logging.getLogger(__name__)


class ProfileService:
    """Read and write paths for user profiles; ownership is checked by the view."""

    @staticmethod
    def active_users() -> QuerySet:
        """Active users annotated with their published, non-deleted article count."""
        published = Q(articles__deleted_at__isnull=True, articles__published=True)
        return (
            User.objects.active()
            .annotate(article_count=Count("articles", filter=published))
            .order_by("-created_at")
        )

    @staticmethod
    def articles_visible_to(author: User, viewer: Any) -> QuerySet:
        """The author's articles; drafts only for the author themself or an admin."""
        articles = Article.objects.select_related("author").filter(author=author)
        if is_owner(viewer, author.id) or is_admin(viewer):
            articles = articles.active()
        else:
            articles = articles.published()
        return articles.order_by("-created_at")

    @staticmethod
    def update(user: User, data: dict[str, Any]) -> User:
        """Replace name, email, and/or password.

        A new email must not belong to another active user. A new password
        needs the current one, verified against the stored hash.
        """
        changed = []

        name = data.get("name")
        if name is not None and name != user.name:
            user.name = name
            changed.append("name")

        email = data.get("email")
        if email and email != user.email:
            if User.objects.active().filter(email=email).exclude(pk=user.pk).exists():
                raise EmailInUse()
            user.email = email
            changed.append("email")

        password = data.get("password")
        if password:
            current_password = data.get("current_password")
            if not current_password:
                raise CurrentPasswordRequired()
            if not user.check_password(current_password):
                raise CurrentPasswordIncorrect()
            user.set_password(password)
            changed.append("password_hash")

        if changed:
            with transaction.atomic():
                user.save(update_fields=[*changed, "updated_at"])
            logger.info("User %s updated (%s)", user.id, ", ".join(changed))
        return user

    @staticmethod
    def soft_delete(user: User) -> int:
        """Soft-delete the user and all their active articles atomically.

        Returns the number of articles deleted alongside the account.
        """
        now = timezone.now()
        with transaction.atomic():
            deleted_articles = Article.objects.active().filter(author=user).update(
                deleted_at=now, updated_at=now
            )
            user.deleted_at = now
            user.save(update_fields=["deleted_at", "updated_at"])
        logger.info("User %s deleted with %d article(s)", user.id, deleted_articles)
        return deleted_articles


__all__ = ["ProfileService"]
