"""Seed an administrator, a demo author, and sample articles."""

from django.core.management.base import BaseCommand
from django.db import transaction

from articles.models import Article
from articles.services import ArticleService
from authentication.models import User

SEED_USERS = [
    {"email": "admin@example.com", "name": "Admin", "password": "AdminPass123", "role": User.Role.ADMIN},
    {"email": "author@example.com", "name": "Demo Author", "password": "AuthorPass123", "role": User.Role.USER},
]

SEED_ARTICLES = [
    {
        "author": "author@example.com",
        "title": "Getting Started with Django REST Framework",
        "image_url": "https://example.com/images/drf.png",
        "category": "Programming",
        "description": "A short tour of serializers, viewsets and routers.",
        "content": (
            "Django REST Framework builds JSON APIs on top of Django. This article "
            "walks through serializers, viewsets, routers, and permission classes."
        ),
        "published": True,
    },
    {
        "author": "author@example.com",
        "title": "Draft Notes on Soft Deletes",
        "image_url": "https://example.com/images/soft-delete.png",
        "category": "Databases",
        "description": "Why rows are marked deleted instead of being removed.",
        "content": (
            "Soft deletes keep history intact: a deleted_at timestamp hides the row "
            "from reads while partial unique indexes free up its natural keys."
        ),
        "published": False,
    },
    {
        "author": "admin@example.com",
        "title": "Welcome to the Blog",
        "image_url": "https://example.com/images/welcome.png",
        "category": "Announcements",
        "description": "An introduction to the publishing platform and its rules.",
        "content": (
            "Authors write drafts and publish them when ready. Administrators can "
            "moderate by removing articles, but they never edit someone else's work."
        ),
        "published": True,
    },
]


def create_seed_users() -> dict[str, User]:
    """Create the demo accounts if missing and return an email->User map."""
    users = {}
    for entry in SEED_USERS:
        user = User.objects.get_active_by_email(entry["email"])
        if user is None:
            user = User.objects.create_user(
                email=entry["email"],
                password=entry["password"],
                name=entry["name"],
                role=entry["role"],
            )
        users[entry["email"]] = user
    return users


def create_seed_articles(users: dict[str, User]) -> list[Article]:
    """Create the sample articles for seeded authors, skipping existing titles."""
    articles = []
    for entry in SEED_ARTICLES:
        data = dict(entry)
        author = users[data.pop("author")]
        existing = Article.objects.active().filter(author=author, title=data["title"]).first()
        articles.append(existing or ArticleService.create(author, data))
    return articles


def reset_seeded_data() -> None:
    """Hard-delete the demo accounts and everything they authored."""
    emails = [entry["email"] for entry in SEED_USERS]
    Article.objects.filter(author__email__in=emails).delete()
    User.objects.filter(email__in=emails).delete()


class Command(BaseCommand):
    """Management command to seed demo users and articles."""

    help = (
        "Seed an admin, a demo author, and sample published/draft articles. "
        "Use --reset to clear previously seeded data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Remove the demo users and their articles before seeding.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        with transaction.atomic():
            if options.get("reset"):
                self.stdout.write("Resetting previously seeded data...")
                reset_seeded_data()
                self.stdout.write(self.style.WARNING("Seeded data cleared."))

            self.stdout.write("Seeding blog data...")
            users = create_seed_users()
            articles = create_seed_articles(users)
        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: {len(users)} users, {len(articles)} articles.")
        )
