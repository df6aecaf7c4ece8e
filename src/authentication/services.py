"""Token and account services: JWT issuance/verification, register, login."""

import logging
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Tuple

import jwt
from django.conf import settings
from django.contrib.auth import authenticate
from django.db import transaction

from core.errors import (
    BlocklistUnavailable,
    EmailAlreadyRegistered,
    InvalidCredentials,
    TokenExpired,
    TokenInvalid,
    UserNotFound,
)
from core.redis_client import get_redis_client
from .models import User

logger = logging.getLogger(__name__)


class TokenService:
    """Handle JWT issuance, decoding, and blocklist operations."""

    ALGORITHM = "HS256"
    BLOCKLIST_PREFIX = "blocklist:token:"
    REQUIRED_CLAIMS = ["sub", "jti", "exp", "iat"]

    @classmethod
    def ttl(cls) -> timedelta:
        return timedelta(hours=settings.JWT_TTL_HOURS)

    @classmethod
    def generate_token(cls, user) -> str:
        """Sign a bearer token carrying the user's id, email, and role."""

        now = datetime.now(timezone.utc)
        payload = cls._build_payload(user, now, cls.ttl())
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=cls.ALGORITHM)

    @classmethod
    def _build_payload(cls, user, issued_at: datetime, ttl: timedelta) -> dict[str, Any]:
        exp = issued_at + ttl
        return {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
            "jti": str(uuid.uuid4()),
            "iat": int(issued_at.timestamp()),
            "exp": int(exp.timestamp()),
        }

    @classmethod
    def decode_token(cls, token: str) -> dict[str, Any]:
        """Decode and validate a JWT's signature, expiry, and required claims."""

        try:
            return jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=[cls.ALGORITHM],
                options={"require": cls.REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalid() from exc

    @classmethod
    def authenticate_token(cls, token: str) -> Tuple[User, dict[str, Any]]:
        """Resolve a bearer token to its still-active user.

        Raises TokenExpired/TokenInvalid for bad tokens (revoked ones are
        invalid) and UserNotFound when the account is gone or soft-deleted.
        """

        payload = cls.decode_token(token)
        if cls.is_token_blocked(payload["jti"]):
            raise TokenInvalid("Token has been revoked.")

        try:
            user_id = uuid.UUID(str(payload["sub"]))
        except ValueError as exc:
            raise TokenInvalid() from exc

        user = User.objects.active().filter(pk=user_id).first()
        if user is None:
            raise UserNotFound()
        return user, payload

    @classmethod
    def block_token(cls, jti: str, exp: int) -> None:
        """Add token jti to blocklist until its expiration timestamp."""

        client = get_redis_client()
        ttl_seconds = max(1, exp - int(time.time()))
        try:
            client.setex(f"{cls.BLOCKLIST_PREFIX}{jti}", ttl_seconds, "1")
        except Exception as exc:  # pragma: no cover - network failure
            raise BlocklistUnavailable("Redis unavailable while blocklisting") from exc

    @classmethod
    def is_token_blocked(cls, jti: str) -> bool:
        """Check if a token jti is present in the blocklist."""

        client = get_redis_client()
        try:
            return client.get(f"{cls.BLOCKLIST_PREFIX}{jti}") is not None
        except Exception as exc:  # pragma: no cover - network failure
            raise BlocklistUnavailable("Redis unavailable while checking blocklist") from exc


class AuthService:
    """Registration, login, and logout flows."""

    @staticmethod
    def register(*, name: str, email: str, password: str) -> Tuple[User, str]:
        """Create a USER account and return it with a fresh token.

        A soft-deleted account does not reserve its email.
        """

        if User.objects.get_active_by_email(email) is not None:
            raise EmailAlreadyRegistered()

        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, name=name)

        logger.info("Registered user %s", user.id)
        return user, TokenService.generate_token(user)

    @staticmethod
    def login(request, *, email: str, password: str) -> Tuple[User, str]:
        """Authenticate credentials; unknown email and wrong password fail alike."""

        user = authenticate(request, email=email, password=password)
        if user is None:
            logger.info("Failed login attempt for %s", User.objects.normalize_email(email))
            raise InvalidCredentials()
        return user, TokenService.generate_token(user)

    @staticmethod
    def logout(payload: dict[str, Any]) -> None:
        """Revoke the token described by ``payload`` until it expires."""

        TokenService.block_token(payload["jti"], payload["exp"])
        logger.info("Revoked token %s for user %s", payload["jti"], payload["sub"])


__all__ = ["TokenService", "AuthService"]
