"""Response helpers and base classes for consistent API envelopes."""

from typing import Any

from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet


def api_response(data: Any, status: int = 200, message: str | None = None) -> Response:
    """Return data wrapped in the standard envelope.

    All successful JSON responses should use this helper to ensure the
    `{ "data": ..., "errors": [] }` shape. ``message`` is added for
    create/update/delete confirmations.
    """

    payload: dict[str, Any] = {"data": data, "errors": []}
    if message:
        payload["message"] = message
    return Response(payload, status=status)


def error_payload(message: str, code: str, errors: list[Any] | None = None) -> dict[str, Any]:
    """Build the error envelope shared by the exception handler and middleware."""

    return {
        "data": None,
        "message": message,
        "code": code,
        "errors": errors if errors is not None else [message],
    }


def _is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and "data" in payload and "errors" in payload


class EnvelopeMixin:
    """Mixin to wrap successful responses in the standard envelope."""

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        """Ensure non-error responses include the `{data, errors}` envelope."""
        if hasattr(response, "data") and response.status_code and response.status_code < 400:
            if response.status_code != 204 and not _is_enveloped(response.data):
                response.data = {"data": response.data, "errors": []}
        # DRF's APIView/GenericViewSet provide finalize_response; mixin alone doesn't.
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    """APIView that ensures successful responses use the standard envelope."""


class BaseViewSet(EnvelopeMixin, GenericViewSet):
    """GenericViewSet variant that wraps successful responses in the envelope.

    Subclasses define only the actions they route; the router maps the rest away.
    """


__all__ = ["api_response", "error_payload", "BaseAPIView", "BaseViewSet"]
