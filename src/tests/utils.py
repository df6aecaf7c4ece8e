"""Shared helpers for tests (user/article factories, fake Redis, auth clients)."""

from __future__ import annotations

from typing import Dict
from unittest import mock

from django.test import TestCase
from rest_framework.test import APIClient

from articles.services import ArticleService
from authentication.models import User
from authentication.services import TokenService


class FakeRedis:
    """Minimal Redis stub supporting the commands used by TokenService."""

    def __init__(self):
        self._store: Dict[str, str] = {}

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        """Mimic Redis SETEX; TTL is ignored in tests, value stored in-memory."""
        self._store[key] = value

    def get(self, key: str):
        """Return stored value for key or None, matching Redis GET semantics."""
        return self._store.get(key)


class FakeRedisTestCase(TestCase):
    """TestCase that swaps the Redis client for an in-memory fake."""

    @classmethod
    def setUpClass(cls):
        """Patch Redis clients to use in-memory fake for all tests."""
        super().setUpClass()
        cls.fake_redis = FakeRedis()
        cls.patchers = [
            mock.patch("core.redis_client.get_redis_client", return_value=cls.fake_redis),
            mock.patch("authentication.services.get_redis_client", return_value=cls.fake_redis),
        ]
        for patcher in cls.patchers:
            patcher.start()

    @classmethod
    def tearDownClass(cls):
        """Stop Redis patches after all tests complete."""
        for patcher in cls.patchers:
            patcher.stop()
        super().tearDownClass()

    def setUp(self):
        """Fresh DRF APIClient per test."""
        self.api_client: APIClient = APIClient()


def create_user(email: str, password: str = "StrongPass123", role: str = User.Role.USER, name: str = "Test User"):
    """Create a user with a bcrypt-hashed password for tests."""

    return User.objects.create_user(email=email, password=password, name=name, role=role)


def auth_client(user) -> APIClient:
    """Return an APIClient authenticated with a fresh bearer token."""

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {TokenService.generate_token(user)}")
    return client


def article_payload(**overrides) -> dict:
    """Valid article input; override any field per test."""

    payload = {
        "title": "Understanding Django Querysets",
        "image_url": "https://example.com/images/querysets.png",
        "category": "Programming",
        "description": "Lazy evaluation, chaining, and when queries hit the database.",
        "content": (
            "Querysets are lazy: building one does not touch the database until it is "
            "iterated, sliced with a step, pickled, or evaluated in a boolean context."
        ),
        "published": False,
    }
    payload.update(overrides)
    return payload


def create_article(author, **overrides):
    """Create an article through the service so the slug is generated."""

    return ArticleService.create(author, article_payload(**overrides))
