"""Custom exception handling: the single translation point for API errors."""

import logging
import traceback
from typing import Any

from django.conf import settings
from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.errors import BlocklistUnavailable, InternalError
from core.response import error_payload

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def _flatten_validation_errors(detail: Any, field: str = "") -> list[dict[str, str]]:
    """Turn DRF's nested ValidationError detail into ``[{field, message}]``."""

    if isinstance(detail, dict):
        errors: list[dict[str, str]] = []
        for key, value in detail.items():
            name = f"{field}.{key}" if field else str(key)
            errors.extend(_flatten_validation_errors(value, name))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten_validation_errors(item, field))
        return errors
    return [{"field": field or "non_field_errors", "message": str(detail)}]


def _is_unique_violation(exc: IntegrityError) -> bool:
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    # SQLite only reports the violation in the message.
    return "unique" in str(exc).lower()


def _request_context(context: dict[str, Any]) -> str:
    request = context.get("request")
    if request is None:
        return "<no request>"
    user = getattr(request, "user", None)
    user_id = getattr(user, "id", None) if getattr(user, "is_authenticated", False) else None
    return f"{request.method} {request.path} user={user_id}"


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap every failure in `{ "data": null, "message", "code", "errors" }`.

    - Store constraint violations become 409 (unique) or 400 (other
      constraints) without leaking engine messages.
    - Other database errors and blocklist outages become 503.
    - DRF exceptions keep their status; validation errors are listed per field.
    - Anything unexpected is logged and returned as a generic 500.
    """

    if isinstance(exc, BlocklistUnavailable):
        logger.error("Token blocklist unavailable: %s (%s)", exc, _request_context(context))
        return Response(
            error_payload("Authentication service unavailable (blocklist).", "service_unavailable"),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, IntegrityError):
        if _is_unique_violation(exc):
            logger.info("Unique constraint violated: %s", _request_context(context))
            return Response(
                error_payload("Resource already exists.", "conflict"),
                status=status.HTTP_409_CONFLICT,
            )
        logger.info("Constraint violated: %s", _request_context(context))
        return Response(
            error_payload("Referenced record does not exist or a required value is missing.", "bad_request"),
            status=status.HTTP_400_BAD_REQUEST,
        )

    # Treat remaining database errors as a temporary outage.
    if isinstance(exc, DatabaseError):
        logger.error("Database error: %s (%s)", exc, _request_context(context))
        return Response(
            error_payload("Service temporarily unavailable.", "service_unavailable"),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled error on %s", _request_context(context), exc_info=exc)
        internal = InternalError()
        payload = error_payload(str(internal.detail), internal.default_code)
        if settings.DEBUG:
            payload["stack"] = traceback.format_exception(exc)
        return Response(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # DRF downgrades NotAuthenticated to 403 when no WWW-Authenticate header
    # is available; authentication failures are always 401 here.
    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if isinstance(exc, ValidationError):
        response.data = error_payload(
            "Validation error",
            "validation_error",
            _flatten_validation_errors(exc.detail),
        )
    elif isinstance(exc, APIException):
        message = str(exc.detail)
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else exc.default_code
        response.data = error_payload(message, code)
    else:
        # Django's Http404 / PermissionDenied, already converted by DRF.
        detail = response.data.get("detail", "") if isinstance(response.data, dict) else response.data
        response.data = error_payload(str(detail), getattr(detail, "code", "error"))

    return response


__all__ = ["custom_exception_handler"]
