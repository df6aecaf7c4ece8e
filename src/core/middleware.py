"""Middleware to authenticate requests via bearer JWT and the Redis blocklist."""

import logging

from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status

from authentication.services import TokenService
from core.errors import BlocklistUnavailable, Unauthorized
from core.response import error_payload

logger = logging.getLogger(__name__)


def get_bearer_token(request) -> str | None:
    """Extract the Bearer token from the Authorization header if present."""
    auth_header = request.META.get("HTTP_AUTHORIZATION", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


class JWTAuthMiddleware(MiddlewareMixin):
    """Verify the bearer token (if any) and attach request.user.

    Requests without a bearer token continue anonymously; routes that need a
    principal reject them later through DRF permissions. A token that is
    present but expired, invalid, revoked, or bound to a deleted account is
    rejected here with 401.
    """

    def process_request(self, request):  # type: ignore[override]
        """Authenticate request using Bearer token if present."""
        request.token_payload = None
        token = get_bearer_token(request)
        if token is None:
            request.user = AnonymousUser()
            return None

        try:
            user, payload = TokenService.authenticate_token(token)
        except Unauthorized as exc:
            logger.debug("Rejected bearer token on %s %s: %s", request.method, request.path, exc.default_code)
            return _unauthorized(exc)
        except BlocklistUnavailable:
            logger.error("Token blocklist unavailable on %s %s", request.method, request.path)
            return _service_unavailable("Authentication service unavailable (blocklist).")
        except DatabaseError as exc:
            logger.error("Database error resolving token user on %s %s: %s", request.method, request.path, exc)
            return _service_unavailable("Service temporarily unavailable.")

        request.user = user
        request.token_payload = payload
        return None


def _unauthorized(exc: Unauthorized) -> JsonResponse:
    return JsonResponse(
        error_payload(str(exc.detail), exc.default_code),
        status=status.HTTP_401_UNAUTHORIZED,
    )


def _service_unavailable(message: str) -> JsonResponse:
    return JsonResponse(
        error_payload(message, "service_unavailable"),
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


__all__ = ["JWTAuthMiddleware", "get_bearer_token"]
